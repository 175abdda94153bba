import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from fairshare.core.config import Settings
from fairshare.main import create_app
from fairshare.repositories.memory_repo import InMemoryRepository
from fairshare.services.expense_service import ExpenseService


@pytest.fixture
def repo() -> InMemoryRepository:
    """Fresh, empty repository for every test."""
    return InMemoryRepository()


@pytest_asyncio.fixture
async def seeded_repo(repo) -> InMemoryRepository:
    """Repository with Alice (1), Bob (2) and Charlie (3)."""
    await repo.seed_users_if_empty()
    return repo


@pytest_asyncio.fixture
async def expense_service(seeded_repo) -> ExpenseService:
    return ExpenseService(seeded_repo)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(SEED_DEMO_USERS=True, LOG_LEVEL="DEBUG")


@pytest.fixture
def client(test_settings, repo):
    """FastAPI test client over its own repository, seeded on startup."""
    app = create_app(settings=test_settings, repository=repo)

    # Context manager runs the lifespan, which seeds the demo users
    with TestClient(app) as test_client:
        yield test_client
