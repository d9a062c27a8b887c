# app.py
"""
Thin runner that builds the app through the factory and runs Socket.IO.
"""
from chatapp.server import main

if __name__ == "__main__":
    main()
