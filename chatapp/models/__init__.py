from .base import db, Model, metadata

# Import model modules so tables register with metadata
from .users import User          # noqa: F401
from .messages import Message    # noqa: F401

__all__ = ["db", "Model", "metadata", "User", "Message"]
