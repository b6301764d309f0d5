import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recipebook.main import app
from recipebook.db import Base, get_db
from recipebook.models import Category
from recipebook.routers import recipes as recipes_router
from recipebook.services import RecipeService

# --- Test Database Setup ---

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,  # Share the in-memory database across sessions
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _no_rate_limit():
    recipes_router.limiter.enabled = False
    yield
    recipes_router.limiter.enabled = True


@pytest.fixture
def client():
    """Test client with DB override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Direct database session for setup and engine tests."""
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def service(db_session):
    return RecipeService(db_session)


@pytest.fixture
def category(db_session):
    cat = Category(name="Desserts", name_key="desserts")
    db_session.add(cat)
    db_session.commit()
    db_session.refresh(cat)
    return cat


@pytest.fixture
def make_recipe(service, category):
    """Create a recipe through the engine with sensible defaults."""
    def _make(**overrides):
        data = {
            "title": "Pancakes",
            "description": "Fluffy breakfast pancakes",
            "ingredients": [
                {"name": "Flour", "quantity": 200, "unit": "g"},
                {"name": "Milk", "quantity": 1.5, "unit": "cup"},
            ],
            "steps": ["Mix", "Fry"],
            "servings": 4,
            "category_id": category.id,
        }
        data.update(overrides)
        return service.create(data)
    return _make
