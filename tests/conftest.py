import pytest

from rentshares.app import create_app
from rentshares.settings import Settings


@pytest.fixture
def app():
    app = create_app(Settings(cors_origins=["http://localhost:5173"]))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
