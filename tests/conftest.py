import pytest
from fastapi.testclient import TestClient

from ideaboard.config import Settings
from ideaboard.database import Database
from ideaboard.main import create_app
from ideaboard.services.accounts import AccountDirectory
from ideaboard.services.ideas import IdeaLedger

# bcrypt's minimum cost keeps the suite fast.
TEST_ROUNDS = 4


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'ideaboard-test.db'}")
    await db.init()
    yield db
    await db.shutdown()


@pytest.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def accounts(session):
    return AccountDirectory(session, password_min_length=6, bcrypt_rounds=TEST_ROUNDS)


@pytest.fixture
def ledger(session):
    return IdeaLedger(session)


@pytest.fixture
def app(tmp_path):
    settings = Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'ideaboard-api.db'}",
        BCRYPT_ROUNDS=TEST_ROUNDS,
    )
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
