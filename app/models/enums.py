import enum

class ComplaintStatus(str, enum.Enum):
    """Complaint lifecycle states (stable spelling, exposed over the API)"""
    RECEIVED = "RECEIVED"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"
    CLOSED = "CLOSED"


class UserRole(str, enum.Enum):
    """Roles of people touching a complaint"""
    APPLICANT = "APPLICANT"
    OFFICER = "OFFICER"
    APPROVER = "APPROVER"
    ADMIN = "ADMIN"
