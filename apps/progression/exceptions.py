"""
Domain exceptions for progression app.
"""
from rest_framework.exceptions import APIException


class ProgressionServiceError(Exception):
    """Base exception for progression service errors."""
    pass


class StudentProgressNotFoundError(APIException):
    """Raised when progress is requested for an unknown student."""
    status_code = 404
    default_detail = 'Student not found.'
    default_code = 'student_not_found'


class CardTokenInvalidError(APIException):
    """Raised when a scanned card token is missing, tampered with or expired."""
    status_code = 401
    default_detail = 'Invalid or expired card.'
    default_code = 'card_token_invalid'
