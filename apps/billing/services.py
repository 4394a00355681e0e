"""
Billing Services Module
========================

This module derives a student's financial standing for the current month
and provides the payment store operations used by check-in.

Functions:
    compute_payment_status: Standing of a single payment row.
    select_month_payment: Pick the authoritative row among corrections.
    current_month_range: First and last day of a month.
    find_for_period: Payments whose period starts within a month.
    get_month_standing: Authoritative payment + standing for a student.
    list_month_standings: Standing of every active student.
    mark_paid: Reconcile a payment.

Standing rules:
    - No payment row for the month: ``pending``.
    - Row marked paid: ``paid`` (whatever its due date).
    - Row without a due date: ``pending``.
    - Otherwise by whole days past the due date: not yet overdue is
      ``pending``, up to the grace period (5 days) is ``late``, beyond it is
      ``delinquent``.

Example:
    Checking the standing before admitting a student::

        from apps.billing.services import get_month_standing

        standing = get_month_standing(student_id=student.id)
        if standing.status == PaymentStanding.DELINQUENT:
            ...
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.students.models import Student
from config.club import DEFAULT_GRACE_DAYS, get_club_config

from .exceptions import PaymentNotFoundError, PaymentAlreadyPaidError, InvalidPeriodError
from .models import Payment, PaymentStatus, PaymentStanding


@dataclass(frozen=True)
class MonthStanding:
    student_id: object
    month_start: date
    month_end: date
    payment: Optional[Payment]
    status: str

    @property
    def due_date(self):
        return self.payment.end_date if self.payment else None


def _as_date(value):
    if isinstance(value, datetime):
        return timezone.localdate(value) if timezone.is_aware(value) else value.date()
    return value


def compute_payment_status(payment, today=None, grace_days=DEFAULT_GRACE_DAYS) -> str:
    """
    Compute the standing of one payment row.

    Args:
        payment: Payment-like object (``status``, ``end_date``) or None.
        today (date, optional): Evaluation day. Defaults to the local date.
        grace_days (int): Days past due that still count as ``late``.

    Returns:
        str: A PaymentStanding value.

    Example:
        >>> compute_payment_status(None)
        'pending'
        >>> compute_payment_status(Payment(status='unpaid', end_date=date(2025, 1, 10)),
        ...                        today=date(2025, 1, 11))
        'late'
    """
    if payment is None:
        return PaymentStanding.PENDING
    if payment.status == PaymentStatus.PAID:
        return PaymentStanding.PAID

    due = _as_date(payment.end_date)
    if due is None:
        return PaymentStanding.PENDING

    today = _as_date(today) or timezone.localdate()
    days_overdue = (today - due).days

    # The due date itself is still payable
    if days_overdue <= 0:
        return PaymentStanding.PENDING
    if days_overdue <= grace_days:
        return PaymentStanding.LATE
    return PaymentStanding.DELINQUENT


def _recency(payment):
    stamp = payment.paid_at or payment.created_at
    if stamp is None:
        return 0.0
    return stamp.timestamp()


def select_month_payment(payments: Iterable, month_start: Optional[date] = None):
    """
    Pick the authoritative payment among corrections for one month.

    Paid rows outrank unpaid rows; among equal paid state the newest
    ``paid_at`` (falling back to ``created_at``) wins.

    Args:
        payments: Payment-like objects.
        month_start (date, optional): Only consider rows whose period starts
            in this month.

    Returns:
        The chosen payment, or None if there is no candidate.
    """
    candidates = list(payments or [])
    if month_start is not None:
        candidates = [
            p for p in candidates
            if p.start_date and (p.start_date.year, p.start_date.month) == (month_start.year, month_start.month)
        ]
    if not candidates:
        return None

    return max(
        candidates,
        key=lambda p: (p.status == PaymentStatus.PAID, _recency(p)),
    )


def current_month_range(today=None):
    """Return (first_day, last_day) of the month containing ``today``."""
    today = _as_date(today) or timezone.localdate()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def find_for_period(*, student_id: UUID, month_start: date, month_end: date):
    """
    Payments whose billing period starts inside [month_start, month_end].

    Rows are picked by ``start_date`` alone, not by overlap with the month:
    a period that started last month and runs into this one is excluded,
    and a row without ``end_date`` is included.

    Raises:
        InvalidPeriodError: If month_end is before month_start
    """
    if month_end < month_start:
        raise InvalidPeriodError("Period end must not be before its start")
    return list(
        Payment.objects.filter(
            student_id=student_id,
            start_date__gte=month_start,
            start_date__lte=month_end,
        )
    )


def get_month_standing(*, student_id: UUID, today=None) -> MonthStanding:
    """Return the authoritative payment and standing for the month of ``today``."""
    today = _as_date(today) or timezone.localdate()
    month_start, month_end = current_month_range(today)
    payments = find_for_period(student_id=student_id, month_start=month_start, month_end=month_end)
    payment = select_month_payment(payments, month_start)
    status = compute_payment_status(payment, today, grace_days=get_club_config().grace_days)
    return MonthStanding(
        student_id=student_id,
        month_start=month_start,
        month_end=month_end,
        payment=payment,
        status=status,
    )


def list_month_standings(*, today=None, status=None) -> list[MonthStanding]:
    """
    Standing of every active student for the month of ``today``.

    Args:
        today (date, optional): Evaluation day.
        status (str, optional): Keep only this PaymentStanding.
    """
    today = _as_date(today) or timezone.localdate()
    month_start, month_end = current_month_range(today)
    grace_days = get_club_config().grace_days

    payments_by_student = {}
    for payment in Payment.objects.filter(
        student__active=True,
        start_date__gte=month_start,
        start_date__lte=month_end,
    ):
        payments_by_student.setdefault(payment.student_id, []).append(payment)

    standings = []
    for student_id in Student.objects.filter(active=True).values_list('id', flat=True):
        payment = select_month_payment(payments_by_student.get(student_id, []), month_start)
        standing = MonthStanding(
            student_id=student_id,
            month_start=month_start,
            month_end=month_end,
            payment=payment,
            status=compute_payment_status(payment, today, grace_days=grace_days),
        )
        if status is None or standing.status == status:
            standings.append(standing)
    return standings


@transaction.atomic
def mark_paid(*, payment_id: UUID, paid_at=None, method=None) -> Payment:
    """
    Mark a payment as paid.

    Uses SELECT FOR UPDATE so two operators cannot reconcile the same row
    twice.

    Raises:
        PaymentNotFoundError: If the payment doesn't exist
        PaymentAlreadyPaidError: If it is already paid
    """
    try:
        payment = Payment.objects.select_for_update().get(id=payment_id)
    except Payment.DoesNotExist:
        raise PaymentNotFoundError()

    if payment.status == PaymentStatus.PAID:
        raise PaymentAlreadyPaidError()

    payment.mark_paid(paid_at=paid_at, method=method)
    return payment
