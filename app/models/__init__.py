from .user import User
from .applicant_status import ApplicantStatus
from .complaint_type import ComplaintType
from .complaint import Complaint
from .receipt_sequence import ReceiptSequenceCounter

__all__ = [
    "User", "ApplicantStatus", "ComplaintType", "Complaint", "ReceiptSequenceCounter",
]
