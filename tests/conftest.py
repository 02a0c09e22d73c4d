import pytest
from fastapi.testclient import TestClient

from src.taskmaster.main import create_app
from src.taskmaster.manager import TaskManager
from src.taskmaster.settings import Settings


@pytest.fixture()
def manager() -> TaskManager:
    return TaskManager()


@pytest.fixture()
def client() -> TestClient:
    # Fresh app (and therefore a fresh, empty collection) for every test
    return TestClient(create_app(Settings()))
