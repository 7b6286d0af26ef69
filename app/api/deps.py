from typing import Generator

from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.services.sequence_allocator import SequenceAllocator, SqlSequenceCounterStore


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI - yields database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_sequence_allocator() -> SequenceAllocator:
    """Allocator over the database counter table (override in tests)."""
    return SequenceAllocator(SqlSequenceCounterStore(SessionLocal))
