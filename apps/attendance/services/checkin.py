"""
Check-in Service
=================

Runs one check-in attempt end to end: resolve the student, read the facts
the Admission Controller needs, decide, and write the attendance record.

The read-decide-insert sequence runs in one transaction with the student
row locked, so two near-simultaneous scans of the same card cannot both be
admitted. Session capacity stays a soft limit across different students.

Failures while reading facts or writing the record raise
AdmissionUnavailableError. A failed counter update after the record was
written is logged and does not undo the check-in: counters can be rebuilt
from attendance.

Example:
    Checking in from a scanned card::

        from apps.attendance.services import check_in

        result = check_in(scanned_token=token, session_id='mon-19h')
        if result.decision.is_blocked:
            print(result.decision.reason)
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.core import signing
from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.billing.services import current_month_range, find_for_period, select_month_payment
from apps.students.models import Student
from apps.students.services import get_student_by_id, increment_counters, StudentNotFoundError
from apps.students.snapshots import StudentSnapshot
from config.club import get_club_config

from ..exceptions import AdmissionUnavailableError
from ..models import AttendanceRecord, CheckInSource
from . import attendance_store
from .admission import AdmissionDecision, decide_admission

logger = logging.getLogger(__name__)

CARD_TOKEN_SALT = 'students.card'


@dataclass(frozen=True)
class CheckInResult:
    decision: AdmissionDecision
    attendance: Optional[AttendanceRecord] = None
    student: Optional[Student] = None

    @property
    def message(self):
        return self.decision.reason


def _as_uuid(value):
    try:
        return UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        return None


def make_card_token(student_id) -> str:
    """Signed token printed on a student's card."""
    return signing.dumps({'sid': str(student_id)}, salt=CARD_TOKEN_SALT)


def resolve_student_id(*, student_id=None, scanned_token=None) -> Optional[UUID]:
    """
    Resolve the identifier of a check-in attempt.

    A valid direct ``student_id`` wins; a malformed one falls through to the
    scanned token. A scanned token is either the raw student UUID or a
    signed card token. Returns None when nothing resolves.
    """
    direct = _as_uuid(student_id) if student_id else None
    if direct is not None:
        return direct
    if not scanned_token:
        return None

    raw = _as_uuid(scanned_token)
    if raw is not None:
        return raw
    return read_card_token(scanned_token)


def read_card_token(token) -> Optional[UUID]:
    """Student id inside a signed card token, or None if tampered or expired."""
    if not token:
        return None
    max_age_days = getattr(settings, 'ACADEMY', {}).get('CARD_TOKEN_MAX_AGE_DAYS', 365)
    try:
        payload = signing.loads(
            token,
            salt=CARD_TOKEN_SALT,
            max_age=timedelta(days=max_age_days),
        )
    except signing.BadSignature:
        logger.info("Rejected card token with bad or expired signature")
        return None

    if not isinstance(payload, dict):
        return None
    return _as_uuid(payload.get('sid'))


def check_in(
    *,
    student_id=None,
    scanned_token=None,
    session_id=None,
    source=None,
    recorded_by=None,
    now=None,
) -> CheckInResult:
    """
    Admit a student to a session and record the attendance.

    Args:
        student_id: Student UUID typed by an operator.
        scanned_token (str, optional): Card payload read by the scanner.
        session_id (str, optional): Session used for capacity control.
        source (str, optional): CheckInSource; inferred from the input.
        recorded_by (User, optional): Operator performing the check-in.
        now (datetime, optional): Check-in instant.

    Returns:
        CheckInResult: Blocked outcomes carry no attendance.

    Raises:
        AdmissionUnavailableError: If the store could not be read or written
    """
    now = now or timezone.now()
    config = get_club_config()
    if source is None:
        typed = _as_uuid(student_id) if student_id else None
        source = CheckInSource.MANUAL if typed is not None else CheckInSource.SCAN

    resolved_id = resolve_student_id(student_id=student_id, scanned_token=scanned_token)
    if resolved_id is None:
        decision = decide_admission(student_id=None, student=None, config=config, now=now)
        logger.info("Check-in blocked: %s", decision.code)
        return CheckInResult(decision=decision)

    try:
        with transaction.atomic():
            try:
                student = get_student_by_id(student_id=resolved_id, for_update=True)
            except StudentNotFoundError:
                student = None

            snapshot = StudentSnapshot.from_model(student) if student else None
            session_count = 0
            payment = None
            last_attendance_at = None

            if snapshot is not None and snapshot.active:
                session_count = attendance_store.count_in_session(session_id=session_id)
                month_start, month_end = current_month_range(now)
                payment = select_month_payment(
                    find_for_period(student_id=resolved_id, month_start=month_start, month_end=month_end),
                    month_start,
                )
                last_attendance_at = attendance_store.most_recent_valid(
                    student_id=resolved_id,
                    since=now - timedelta(minutes=config.duplicate_window_minutes),
                )

            decision = decide_admission(
                student_id=resolved_id,
                student=snapshot,
                config=config,
                session_id=session_id,
                session_count=session_count,
                payment=payment,
                last_valid_attendance_at=last_attendance_at,
                now=now,
            )

            if not decision.record_attendance:
                logger.info("Check-in blocked for student %s: %s", resolved_id, decision.code)
                return CheckInResult(decision=decision, student=student)

            attendance = attendance_store.insert(
                student=student,
                attended_at=now,
                session_id=session_id,
                source=source,
                recorded_by=recorded_by,
            )
    except DatabaseError as exc:
        logger.exception("Check-in for student %s failed", resolved_id)
        raise AdmissionUnavailableError() from exc

    try:
        with transaction.atomic():
            increment_counters(student_id=resolved_id)
    except DatabaseError:
        logger.warning(
            "Counter update failed for student %s after attendance %s",
            resolved_id, attendance.id, exc_info=True,
        )

    logger.info(
        "Check-in %s for student %s (payment %s)",
        decision.outcome, resolved_id, decision.payment_status,
    )
    return CheckInResult(decision=decision, attendance=attendance, student=student)
