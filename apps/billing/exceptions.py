"""
Domain exceptions for billing app.

Exception Hierarchy:
    BillingServiceError (base)
    └── InvalidPeriodError

HTTP-facing errors are DRF APIExceptions so views can raise them directly.
"""
from rest_framework.exceptions import APIException


class BillingServiceError(Exception):
    """Base exception for billing service errors."""
    pass


class InvalidPeriodError(BillingServiceError):
    """Raised when a billing period ends before it starts."""
    pass


class PaymentNotFoundError(APIException):
    """Payment not found."""
    status_code = 404
    default_detail = 'Payment not found.'
    default_code = 'payment_not_found'


class PaymentAlreadyPaidError(APIException):
    """Payment already marked as paid."""
    status_code = 400
    default_detail = 'Payment is already marked as paid.'
    default_code = 'payment_already_paid'
