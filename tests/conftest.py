import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.repository.task_repository import InMemoryTaskRepository
from app.services.task_service import TaskService


@pytest.fixture()
def repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture()
def service(repo: InMemoryTaskRepository) -> TaskService:
    return TaskService(repo)


@pytest.fixture()
def client(service: TaskService):
    """TestClient over an app wired to a fresh in-memory store."""
    with TestClient(create_app(service)) as test_client:
        yield test_client
