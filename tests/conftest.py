"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from score_projector.api.main import create_app
from score_projector.infrastructure.database.models import Base
from score_projector.infrastructure.database.session import get_db
from score_projector.domain.models import Profile, Scenario


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
def new_client_profile() -> Profile:
    """Mid-range new enrollee with one positive tradeline and no tools"""
    return Profile(
        fico_score=650,
        total_debt=20000,
        monthly_income=4000,
        utilization_bucket=70,
        accounts_enrolling=3,
        positive_accounts=1,
        oldest_account_age_years=5,
        total_credit_limit=25000,
        program_timeline_months=36,
        scenario=Scenario.NEW_CLIENT,
        secured_card=False,
        credit_builder=False,
        authorized_user=False,
    )


@pytest.fixture
def profile_payload() -> Dict[str, Any]:
    """Wizard form payload as the client submits it"""
    return {
        "fico_score": 650,
        "total_debt": 20000,
        "monthly_income": 4000,
        "utilization_bucket": 70,
        "accounts_enrolling": 3,
        "positive_accounts": 1,
        "oldest_account_age_years": 5,
        "total_credit_limit": 25000,
        "program_timeline_months": 36,
        "scenario": "pre-enrollment",
        "secured_card": False,
        "credit_builder": False,
        "authorized_user": False,
    }
