"""
Complaint intake - test configuration and fixtures
"""
import os
import tempfile

import pytest
from faker import Faker

# Point the app at a throwaway SQLite file before anything imports settings
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), "complaint_intake_test.db")
os.environ['DATABASE_URL'] = f"sqlite:///{TEST_DB_PATH}"
os.environ['RECEIPT_ALLOCATION_ATTEMPTS'] = '3'

from fastapi.testclient import TestClient

from app.main import app
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.models import ComplaintType, User
from app.models.enums import UserRole
from app.schemas.complaint import ComplaintCreate
from app.services.sequence_allocator import (
    InMemorySequenceCounterStore,
    SequenceAllocator,
    SqlSequenceCounterStore,
)

fake = Faker()



@pytest.fixture(autouse=True)
def setup_database():
    """Fresh schema for every test"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def memory_store() -> InMemorySequenceCounterStore:
    return InMemorySequenceCounterStore()


@pytest.fixture
def sql_store() -> SqlSequenceCounterStore:
    return SqlSequenceCounterStore(SessionLocal)


@pytest.fixture
def allocator(sql_store) -> SequenceAllocator:
    return SequenceAllocator(sql_store)


@pytest.fixture
def applicant(db_session) -> User:
    user = User(
        login_id=fake.unique.user_name(),
        name=fake.name(),
        role=UserRole.APPLICANT,
        phone=fake.numerify("010-####-####"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def complaint_type(db_session) -> ComplaintType:
    complaint_type = ComplaintType(name="Road damage", description="Potholes, broken pavement")
    db_session.add(complaint_type)
    db_session.commit()
    db_session.refresh(complaint_type)
    return complaint_type


@pytest.fixture
def complaint_payload(applicant, complaint_type):
    """Builds ComplaintCreate payloads for the shared applicant and type"""
    def _build(**overrides) -> ComplaintCreate:
        data = {
            "title": fake.sentence(nb_words=5),
            "content": fake.paragraph(),
            "contact_phone": fake.numerify("010-####-####"),
            "type_id": complaint_type.id,
            "applicant_id": applicant.id,
        }
        data.update(overrides)
        return ComplaintCreate(**data)
    return _build
