"""
Domain exceptions for attendance app.

Blocked admissions are not exceptions: they are AdmissionDecision
outcomes. The errors here cover infrastructure failures and record
management.
"""
from rest_framework.exceptions import APIException


class AttendanceServiceError(Exception):
    """Base exception for attendance service errors."""
    pass


class AttendanceNotFoundError(AttendanceServiceError):
    """Attendance record does not exist."""
    pass


class AttendanceAlreadyVoidedError(AttendanceServiceError):
    """Attendance record was already voided."""
    pass


class AdmissionUnavailableError(APIException):
    """
    Check-in facts could not be read or the record could not be written.

    Distinct from a blocked admission: the caller should retry and must not
    record a negative outcome.
    """
    status_code = 503
    default_detail = 'Check-in is temporarily unavailable. Please try again.'
    default_code = 'unavailable'
