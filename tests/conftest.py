import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from userbook.config import Settings
from userbook.crud import UserRepository
from userbook.database import Base, ConnectionFactory, get_db
from userbook.domain import User
from userbook.main import create_app

# In-memory SQLite database shared across connections via StaticPool.
TEST_DATABASE_URL = "sqlite://"


engine_test = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, database_url=TEST_DATABASE_URL, app_name="Users")


@pytest.fixture()
def connection_factory(settings):
    """Connection factory bound to a freshly created schema.

    Tables are dropped and recreated for every test function.
    """
    factory = ConnectionFactory(settings, engine=engine_test)
    Base.metadata.drop_all(bind=engine_test)
    factory.create_schema()
    return factory


@pytest.fixture()
def db_session(connection_factory):
    db = connection_factory.make()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def repository(db_session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture()
def app(settings, connection_factory):
    return create_app(settings, engine=engine_test)


@pytest.fixture()
def client(app, db_session):
    """TestClient whose requests all run on the test session.

    Overriding `get_db` lets tests inspect what a request wrote through
    the same session the request used.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            # Session cleanup is handled by the db_session fixture.
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def user_factory(repository):
    """Store users directly, without going through the HTTP form."""

    def _create_user(name: str) -> User:
        user = User(name=name)
        repository.add(user)
        return user

    return _create_user
