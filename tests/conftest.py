"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from smartspend_companion.api.main import create_app
from smartspend_companion.companion.dialogue import DialogueBank
from smartspend_companion.infrastructure.database.models import Base
from smartspend_companion.infrastructure.database.session import get_db
from smartspend_companion.domain.models import BudgetCategory, BudgetContext, PurchaseRequest


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def dialogue() -> DialogueBank:
    """Deterministic phrase bank"""
    return DialogueBank(seed=42)


@pytest.fixture
def coffee_request() -> PurchaseRequest:
    """Low-desire, low-urgency everyday purchase"""
    return PurchaseRequest(
        item_name="Coffee",
        amount=Decimal("3.50"),
        category=BudgetCategory.FOOD_AND_DINING,
        desire_level=2,
        urgency=1,
    )


@pytest.fixture
def food_budget() -> BudgetContext:
    """Food budget with a little room left"""
    return BudgetContext(
        category=BudgetCategory.FOOD_AND_DINING,
        monthly_limit=Decimal("200"),
        spent=Decimal("190"),
    )
