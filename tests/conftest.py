import pytest

from chatapp import create_app
from chatapp.config import Settings
from chatapp.db import connect_db

CLIENT_URL = "http://localhost:5173"


def build_app(**config):
    settings = Settings(client_url=CLIENT_URL, database_url="sqlite://", secret_key="test-secret")
    app = create_app({"TESTING": True, **config}, settings=settings)
    assert connect_db(app)
    return app


@pytest.fixture
def app():
    return build_app()


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c
