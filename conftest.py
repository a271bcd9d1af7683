import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError, RedisError
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import Settings
from app.database import Base
from app.main import create_app
from app.models.user import User, ROLE_ADMIN, ROLE_USER
from app.auth_module.logic import get_password_hash


class FakeClock:
    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRedis:
    """In-memory stand-in for the few redis-py calls the app makes."""

    def __init__(self, clock=None):
        self.clock = clock or FakeClock()
        self.data = {}
        self.available = True
        self.writable = True
        self.closed = False

    def _check(self):
        if not self.available:
            raise RedisConnectionError("Connection refused")

    def _purge(self, key):
        entry = self.data.get(key)
        if entry is not None and entry[1] is not None and self.clock() >= entry[1]:
            del self.data[key]

    def ping(self):
        self._check()
        return True

    def set(self, key, value, ex=None, nx=False):
        self._check()
        if not self.writable:
            raise RedisError("READONLY You can't write against a read only replica.")
        self._purge(key)
        if nx and key in self.data:
            return None
        expires_at = self.clock() + ex if ex else None
        self.data[key] = (value, expires_at)
        return True

    def get(self, key):
        self._check()
        self._purge(key)
        entry = self.data.get(key)
        return entry[0] if entry else None

    def ttl(self, key):
        self._purge(key)
        entry = self.data.get(key)
        if entry is None:
            return -2
        if entry[1] is None:
            return -1
        return int(entry[1] - self.clock())

    def close(self):
        self.closed = True


TEST_SETTINGS = dict(
    SECRET_KEY="test-secret-key",
    ISSUER="taskboard-test",
    AUDIENCE="taskboard-test-web",
    REDIS_URL="redis://localhost:6379/15",
    RATE_LIMIT_ENABLED=False,
    LOG_LEVEL="WARNING",
)

engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def settings():
    return Settings(**TEST_SETTINGS)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture(name="db_session")
def db_session_fixture():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        db.add(User(
            name="Test User",
            email="test@example.com",
            password=get_password_hash("testpassword"),
            role=ROLE_USER,
        ))
        db.add(User(
            name="Admin User",
            email="admin@example.com",
            password=get_password_hash("adminpassword"),
            role=ROLE_ADMIN,
        ))
        db.commit()
        yield db
    finally:
        db.close()


@pytest.fixture
def app(settings, fake_redis, db_session):
    return create_app(settings, redis_client=fake_redis, engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def test_user(db_session):
    return db_session.query(User).filter(User.email == "test@example.com").first()


@pytest.fixture
def admin_user(db_session):
    return db_session.query(User).filter(User.email == "admin@example.com").first()


def bearer(app, user) -> dict:
    token = app.state.token_issuer.create_access_token(uid=user.id, role=user.role, data={"email": user.email})
    return {"Authorization": f"Bearer {token}"}
