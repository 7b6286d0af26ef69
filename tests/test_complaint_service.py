from datetime import date

import pytest

from app.core.exceptions import (
    AllocationError,
    ComplaintNotDeletableError,
    ComplaintNotFoundError,
    ComplaintTypeNotFoundError,
    ComplaintValidationError,
    ConcurrentStatusUpdateError,
    InvalidStatusTransitionError,
)
from app.db.session import SessionLocal
from app.models.complaint import Complaint
from app.models.enums import ComplaintStatus
from app.schemas.complaint import ComplaintUpdate
from app.services.complaint_service import ComplaintService
from app.services.sequence_allocator import (
    InMemorySequenceCounterStore,
    SequenceAllocator,
    SequenceCounterStore,
)

ISSUE_DATE = date(2025, 1, 15)

S = ComplaintStatus


class FlakyStore(SequenceCounterStore):
    def __init__(self, failures: int):
        self.failures = failures
        self.calls = 0
        self.inner = InMemorySequenceCounterStore()

    def increment(self, issue_date):
        self.calls += 1
        if self.calls <= self.failures:
            raise AllocationError(issue_date, "connection reset")
        return self.inner.increment(issue_date)


@pytest.fixture
def create(db_session, allocator, complaint_payload):
    def _create(issue_date=ISSUE_DATE, **overrides) -> Complaint:
        return ComplaintService.create_complaint(
            db_session, complaint_payload(**overrides), allocator, issue_date=issue_date
        )
    return _create


def test_create_assigns_receipt_number_and_initial_status(create):
    complaint = create()
    assert complaint.receipt_number == "CMP-20250115-0001"
    assert complaint.issue_date == ISSUE_DATE
    assert complaint.daily_sequence == 1
    assert complaint.status == S.RECEIVED
    assert complaint.version == 1


def test_receipt_numbers_continue_within_a_day_and_reset_next_day(create):
    assert create().receipt_number == "CMP-20250115-0001"
    assert create().receipt_number == "CMP-20250115-0002"
    assert create(issue_date=date(2025, 1, 16)).receipt_number == "CMP-20250116-0001"


def test_create_strips_text_fields(create):
    complaint = create(title="  Broken streetlight  ")
    assert complaint.title == "Broken streetlight"


def test_blank_field_is_rejected_before_allocation(create, sql_store):
    with pytest.raises(ComplaintValidationError):
        create(title="   ")
    assert sql_store.current(ISSUE_DATE) == 0


def test_unknown_type_is_rejected_before_allocation(create, sql_store):
    with pytest.raises(ComplaintTypeNotFoundError):
        create(type_id=9999)
    assert sql_store.current(ISSUE_DATE) == 0


def test_inactive_type_is_rejected(create, complaint_type, db_session):
    complaint_type.is_active = False
    db_session.commit()
    with pytest.raises(ComplaintTypeNotFoundError):
        create()


def test_unknown_applicant_is_rejected(create):
    with pytest.raises(ComplaintValidationError):
        create(applicant_id=9999)


def test_allocation_is_retried(db_session, complaint_payload):
    store = FlakyStore(failures=2)
    complaint = ComplaintService.create_complaint(
        db_session, complaint_payload(), SequenceAllocator(store), issue_date=ISSUE_DATE
    )
    assert store.calls == 3
    assert complaint.receipt_number == "CMP-20250115-0001"


def test_allocation_error_surfaces_after_retries(db_session, complaint_payload):
    store = FlakyStore(failures=10)
    with pytest.raises(AllocationError):
        ComplaintService.create_complaint(
            db_session, complaint_payload(), SequenceAllocator(store), issue_date=ISSUE_DATE
        )
    assert store.calls == 3
    assert db_session.query(Complaint).count() == 0


def test_get_by_id_and_receipt_number(create, db_session):
    complaint = create()
    assert ComplaintService.get_complaint_by_id(db_session, complaint.id).id == complaint.id
    found = ComplaintService.get_complaint_by_receipt_number(db_session, "CMP-20250115-0001")
    assert found.id == complaint.id

    with pytest.raises(ComplaintNotFoundError):
        ComplaintService.get_complaint_by_id(db_session, 9999)
    with pytest.raises(ComplaintNotFoundError):
        ComplaintService.get_complaint_by_receipt_number(db_session, "CMP-20250115-0002")
    with pytest.raises(ComplaintValidationError):
        ComplaintService.get_complaint_by_receipt_number(db_session, "not-a-receipt")


def test_list_filters_by_status(create, db_session):
    first = create()
    create()
    ComplaintService.change_status(db_session, first.id, S.IN_PROGRESS)

    items, total = ComplaintService.list_complaints(db_session, status=S.IN_PROGRESS)
    assert total == 1
    assert items[0].id == first.id

    items, total = ComplaintService.list_complaints(db_session, skip=0, limit=1)
    assert total == 2
    assert len(items) == 1


def test_update_does_not_touch_status(create, db_session):
    complaint = create()
    updated = ComplaintService.update_complaint(
        db_session, complaint.id, ComplaintUpdate(title="New title", review_comment="checked")
    )
    assert updated.title == "New title"
    assert updated.review_comment == "checked"
    assert updated.status == S.RECEIVED


def test_full_workflow(create, db_session):
    complaint = create()
    for status in (S.IN_PROGRESS, S.RESOLVED, S.CLOSED):
        complaint = ComplaintService.change_status(db_session, complaint.id, status)
        assert complaint.status == status

    assert complaint.resolved_at is not None
    assert complaint.closed_at is not None
    # receipt number never changes
    assert complaint.receipt_number == "CMP-20250115-0001"


def test_invalid_transition_writes_nothing(create, db_session):
    complaint = create()
    with pytest.raises(InvalidStatusTransitionError) as exc_info:
        ComplaintService.change_status(db_session, complaint.id, S.CLOSED)
    assert exc_info.value.details == {"current": "RECEIVED", "requested": "CLOSED"}

    db_session.rollback()
    with SessionLocal() as other:
        stored = other.get(Complaint, complaint.id)
        assert stored.status == S.RECEIVED
        assert stored.version == 1


def test_closed_complaint_cannot_move(create, db_session):
    complaint = create()
    for status in (S.REJECTED, S.CLOSED):
        ComplaintService.change_status(db_session, complaint.id, status)
    for status in S:
        with pytest.raises(InvalidStatusTransitionError):
            ComplaintService.change_status(db_session, complaint.id, status)


def test_stale_expected_version_is_rejected(create, db_session):
    complaint = create()
    ComplaintService.change_status(db_session, complaint.id, S.IN_PROGRESS)
    with pytest.raises(ConcurrentStatusUpdateError):
        ComplaintService.change_status(db_session, complaint.id, S.RESOLVED, expected_version=1)


def test_lost_race_is_detected(create):
    complaint_id = create().id

    first, second = SessionLocal(), SessionLocal()
    try:
        # both requests hold the row at version 1
        seen_by_first = first.get(Complaint, complaint_id)
        seen_by_second = second.get(Complaint, complaint_id)
        assert seen_by_first.version == seen_by_second.version == 1

        ComplaintService.change_status(first, complaint_id, S.IN_PROGRESS)
        with pytest.raises(ConcurrentStatusUpdateError):
            ComplaintService.change_status(second, complaint_id, S.REJECTED)
    finally:
        first.close()
        second.close()

    with SessionLocal() as check:
        assert check.get(Complaint, complaint_id).status == S.IN_PROGRESS


def test_delete_only_received(create, db_session, applicant):
    deletable = create()
    ComplaintService.delete_complaint(db_session, deletable.id, applicant_id=applicant.id)
    with pytest.raises(ComplaintNotFoundError):
        ComplaintService.get_complaint_by_id(db_session, deletable.id)

    started = create()
    ComplaintService.change_status(db_session, started.id, S.IN_PROGRESS)
    with pytest.raises(ComplaintNotDeletableError):
        ComplaintService.delete_complaint(db_session, started.id)


def test_delete_by_other_applicant_is_refused(create, db_session, applicant):
    complaint = create()
    with pytest.raises(ComplaintNotDeletableError):
        ComplaintService.delete_complaint(db_session, complaint.id, applicant_id=applicant.id + 1)


def test_deleted_receipt_number_is_not_reissued(create, db_session):
    first = create()
    ComplaintService.delete_complaint(db_session, first.id)
    assert create().receipt_number == "CMP-20250115-0002"


def test_inactive_applicant_is_rejected_before_allocation(create, applicant, db_session, sql_store):
    applicant.is_active = False
    db_session.commit()
    with pytest.raises(ComplaintValidationError):
        create()
    assert sql_store.current(ISSUE_DATE) == 0
