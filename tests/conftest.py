import os

# Configure before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["ENVIRONMENT"] = "test"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from ecofinds.database.core import Base, get_db
from ecofinds.core.rate_limiter import limiter
from ecofinds.products.models import Category, Product
from ecofinds.users.models import User
from ecofinds.utils import password_utils
from main import app

# Use an in-memory SQLite database for testing
TEST_SQLALCHEMY_DATABASE_URL = "sqlite://"

TEST_PASSWORD = "ValidPassword123"


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """
    Creates a new, isolated in-memory database session for each test.
    """
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def make_user(db, email, username, password=TEST_PASSWORD):
    user = User(
        email=email,
        first_name="Test",
        last_name="User",
        username=username,
        password_hash=password_utils.get_password_hash(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_product(db, owner, title="Desk Lamp", price_cents=1000, category=None, status="active"):
    product = Product(
        owner_id=owner.id,
        title=title,
        price_cents=price_cents,
        category_id=category.id if category else None,
        status=status,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture(scope="function")
def categories(db_session):
    rows = [Category(name=name) for name in ("Electronics", "Books", "Home")]
    db_session.add_all(rows)
    db_session.commit()
    return {row.name: row for row in rows}


@pytest.fixture(scope="function")
def test_user(db_session):
    """
    Creates a pre-defined, password-based user in the test database.
    """
    return make_user(db_session, "test@example.com", "testuser")


@pytest.fixture(scope="function")
def other_user(db_session):
    return make_user(db_session, "other@example.com", "otheruser")


@pytest.fixture(scope="function")
def client(db_session):
    """
    Creates a TestClient for the app with the test database swapped in.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def login(client, email, password=TEST_PASSWORD):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response


@pytest.fixture(scope="function")
def auth_client(client, test_user):
    """
    The `client`, logged in as `test_user` through its session cookie.
    """
    login(client, test_user.email)
    return client
