import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tienda.config.database import Base, get_db
from tienda.main import app
from tienda.modules.currency.service import get_current_rate, reset_cache
from tienda.shared.database.models import Category, Product

TEST_RATE = 50.0

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_rate] = lambda: TEST_RATE
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clear_rate_cache():
    reset_cache()
    yield
    reset_cache()


@pytest.fixture
def category(db_session):
    category = Category(name="Vestidos")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def make_product(db_session, category):
    def _make_product(**overrides):
        data = {
            "name": "Vestido Lino",
            "description": "Vestido de lino color arena",
            "price_usd": 20.0,
            "stock": 10,
            "image": "https://cdn.example.com/vestido.jpg",
            "category_id": category.id,
        }
        data.update(overrides)
        product = Product(**data)
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make_product
