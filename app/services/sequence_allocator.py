# app/services/sequence_allocator.py
"""
Daily receipt-number allocation.

SequenceAllocator hands out 1, 2, 3, ... per calendar date and renders
CMP-YYYYMMDD-NNNN. The counter lives behind a SequenceCounterStore so the
allocator can run against the database or an in-process table:

  SqlSequenceCounterStore       – receipt_sequence_counters table, one short
                                  transaction per increment
  InMemorySequenceCounterStore  – dict guarded by one lock per date

A store either returns a value that is already durable or raises
AllocationError with the counter left untouched.
"""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Callable, Dict

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import AllocationError
from app.models.receipt_sequence import ReceiptSequenceCounter
from app.services.utils.receipt_number import format_receipt_number, normalize_issue_date

logger = logging.getLogger(__name__)


class SequenceCounterStore(ABC):
    """Durable per-date counter with an atomic increment-and-fetch."""

    @abstractmethod
    def increment(self, issue_date: date) -> int:
        """Add one to the counter for issue_date and return the new value."""


class InMemorySequenceCounterStore(SequenceCounterStore):

    def __init__(self) -> None:
        self._counters: Dict[date, int] = {}
        self._locks: Dict[date, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, issue_date: date) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(issue_date)
            if lock is None:
                lock = self._locks[issue_date] = threading.Lock()
            return lock

    def increment(self, issue_date: date) -> int:
        with self._lock_for(issue_date):
            value = self._counters.get(issue_date, 0) + 1
            self._counters[issue_date] = value
            return value

    def current(self, issue_date: date) -> int:
        """Highest value issued so far for issue_date (0 if none)."""
        return self._counters.get(issue_date, 0)


class SqlSequenceCounterStore(SequenceCounterStore):
    """
    Counter rows in receipt_sequence_counters.

    The UPDATE takes the row lock first, so the read-back inside the same
    transaction sees our own increment. The very first allocation of a
    day inserts the row; if two callers race on that insert the loser
    rolls back and goes through the UPDATE path.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def increment(self, issue_date: date) -> int:
        try:
            return self._increment(issue_date)
        except IntegrityError:
            logger.info("Counter row for %s created concurrently, retrying", issue_date)
            try:
                return self._increment(issue_date)
            except SQLAlchemyError as e:
                raise AllocationError(issue_date, str(e)) from e
        except SQLAlchemyError as e:
            raise AllocationError(issue_date, str(e)) from e

    def _increment(self, issue_date: date) -> int:
        session = self._session_factory()
        try:
            now = datetime.now(timezone.utc)
            result = session.execute(
                update(ReceiptSequenceCounter)
                .where(ReceiptSequenceCounter.issue_date == issue_date)
                .values(
                    last_sequence=ReceiptSequenceCounter.last_sequence + 1,
                    updated_at=now,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount:
                value = session.execute(
                    select(ReceiptSequenceCounter.last_sequence)
                    .where(ReceiptSequenceCounter.issue_date == issue_date)
                ).scalar_one()
            else:
                session.add(ReceiptSequenceCounter(
                    issue_date=issue_date,
                    last_sequence=1,
                    created_at=now,
                    updated_at=now,
                ))
                session.flush()
                value = 1

            session.commit()
            return value
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def current(self, issue_date: date) -> int:
        session = self._session_factory()
        try:
            value = session.execute(
                select(ReceiptSequenceCounter.last_sequence)
                .where(ReceiptSequenceCounter.issue_date == issue_date)
            ).scalar_one_or_none()
            return value or 0
        finally:
            session.close()


class SequenceAllocator:
    """Issues receipt numbers; holds no counter state of its own."""

    def __init__(self, store: SequenceCounterStore):
        self.store = store

    def next_sequence(self, issue_date) -> int:
        issue_date = normalize_issue_date(issue_date)
        try:
            sequence = self.store.increment(issue_date)
        except AllocationError:
            logger.error("❌ Receipt sequence allocation failed for %s", issue_date)
            raise
        logger.debug("Allocated sequence %d for %s", sequence, issue_date)
        return sequence

    @staticmethod
    def format(issue_date, sequence: int) -> str:
        return format_receipt_number(issue_date, sequence)

    def issue_receipt_number(self, issue_date) -> str:
        issue_date = normalize_issue_date(issue_date)
        return self.format(issue_date, self.next_sequence(issue_date))
