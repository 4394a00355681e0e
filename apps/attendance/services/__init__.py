"""
Attendance services - Business logic layer.

This package contains the Admission Controller, the attendance store and
the check-in orchestration built on them.
"""

from .admission import (
    AdmissionOutcome,
    AdmissionCode,
    AdmissionDecision,
    decide_admission,
)

from .attendance_store import (
    count_in_session,
    most_recent_valid,
    insert,
    list_since,
    void_record,
)

from .checkin import (
    CheckInResult,
    make_card_token,
    read_card_token,
    resolve_student_id,
    check_in,
)

__all__ = [
    # Admission
    'AdmissionOutcome',
    'AdmissionCode',
    'AdmissionDecision',
    'decide_admission',
    # Store
    'count_in_session',
    'most_recent_valid',
    'insert',
    'list_since',
    'void_record',
    # Check-in
    'CheckInResult',
    'make_card_token',
    'read_card_token',
    'resolve_student_id',
    'check_in',
]
