"""
Admission Controller
=====================

Decides whether a check-in attempt is admitted. Pure: every fact (student,
session count, payment, last attendance) is read by the caller and passed
in; the decision tells the caller whether to record attendance.

Decision order, first match wins:
    1. No identifier: ``invalid_request``.
    2. Unknown or inactive student: ``not_found_or_inactive``.
    3. Session full: ``capacity_reached``.
    4. Delinquent payment: ``blocked_financial``.
    5. Valid attendance inside the duplicate window: ``duplicate_window``.
    6. Paid: ``accepted``. Pending or late: warning ``financial_pending``.

Example:
    Deciding with facts read by the caller::

        decision = decide_admission(
            student_id=snapshot.id,
            student=snapshot,
            session_id='2025-03-10-19h',
            session_count=12,
            payment=payment,
            last_valid_attendance_at=None,
            now=timezone.now(),
            config=get_club_config(),
        )
        if decision.record_attendance:
            ...
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from django.db import models
from django.utils import timezone

from apps.billing.models import PaymentStanding
from apps.billing.services import compute_payment_status


class AdmissionOutcome(models.TextChoices):
    ACCEPTED = 'accepted', 'Accepted'
    WARNING = 'warning', 'Accepted with warning'
    BLOCKED = 'blocked', 'Blocked'


class AdmissionCode(models.TextChoices):
    INVALID_REQUEST = 'invalid_request', 'Invalid request'
    NOT_FOUND_OR_INACTIVE = 'not_found_or_inactive', 'Student not found or inactive'
    CAPACITY_REACHED = 'capacity_reached', 'Capacity reached'
    BLOCKED_FINANCIAL = 'blocked_financial', 'Blocked for payment'
    DUPLICATE_WINDOW = 'duplicate_window', 'Already checked in'
    FINANCIAL_PENDING = 'financial_pending', 'Payment pending'
    ACCEPTED = 'accepted', 'Accepted'


REASONS = {
    AdmissionCode.INVALID_REQUEST: 'A student id or card token is required.',
    AdmissionCode.NOT_FOUND_OR_INACTIVE: 'Student not found or inactive.',
    AdmissionCode.CAPACITY_REACHED: 'This class is full.',
    AdmissionCode.BLOCKED_FINANCIAL: 'Check-in blocked: monthly payment is overdue. Please see the front desk.',
    AdmissionCode.DUPLICATE_WINDOW: 'Student already checked in recently.',
    AdmissionCode.FINANCIAL_PENDING: 'Check-in recorded. Monthly payment is pending.',
    AdmissionCode.ACCEPTED: 'Check-in recorded.',
}


@dataclass(frozen=True)
class AdmissionDecision:
    outcome: str
    code: str
    reason: str
    payment_status: Optional[str] = None

    @property
    def record_attendance(self):
        """True when the caller must write the attendance record."""
        return self.outcome != AdmissionOutcome.BLOCKED

    @property
    def is_blocked(self):
        return self.outcome == AdmissionOutcome.BLOCKED

    @classmethod
    def blocked(cls, code, payment_status=None):
        return cls(AdmissionOutcome.BLOCKED, code, REASONS[code], payment_status)


def decide_admission(
    *,
    student_id,
    student,
    config,
    session_id=None,
    session_count=0,
    payment=None,
    last_valid_attendance_at=None,
    now=None,
) -> AdmissionDecision:
    """
    Decide a single check-in attempt.

    Args:
        student_id: Resolved identifier, or None when nothing was resolvable.
        student: StudentSnapshot, or None if not found.
        config (ClubConfig): Capacity, duplicate window and grace period.
        session_id (str, optional): Session the student is joining.
        session_count (int): Attendees already admitted to the session.
        payment: Authoritative payment row of the current month, or None.
        last_valid_attendance_at (datetime, optional): Most recent valid
            attendance of the student.
        now (datetime, optional): Decision instant.

    Returns:
        AdmissionDecision
    """
    if not student_id:
        return AdmissionDecision.blocked(AdmissionCode.INVALID_REQUEST)

    if student is None or not student.active:
        return AdmissionDecision.blocked(AdmissionCode.NOT_FOUND_OR_INACTIVE)

    if session_id and (session_count or 0) >= config.capacity_ceiling:
        return AdmissionDecision.blocked(AdmissionCode.CAPACITY_REACHED)

    now = now or timezone.now()
    payment_status = compute_payment_status(
        payment,
        today=now,
        grace_days=config.grace_days,
    )
    if payment_status == PaymentStanding.DELINQUENT:
        return AdmissionDecision.blocked(AdmissionCode.BLOCKED_FINANCIAL, payment_status)

    window = timedelta(minutes=config.duplicate_window_minutes)
    if last_valid_attendance_at is not None and now - last_valid_attendance_at < window:
        return AdmissionDecision.blocked(AdmissionCode.DUPLICATE_WINDOW, payment_status)

    if payment_status == PaymentStanding.PAID:
        return AdmissionDecision(
            AdmissionOutcome.ACCEPTED,
            AdmissionCode.ACCEPTED,
            REASONS[AdmissionCode.ACCEPTED],
            payment_status,
        )
    return AdmissionDecision(
        AdmissionOutcome.WARNING,
        AdmissionCode.FINANCIAL_PENDING,
        REASONS[AdmissionCode.FINANCIAL_PENDING],
        payment_status,
    )
