"""
Progression services.

Load students and their attendance, then hand them to the pure evaluator.
Nothing here writes: applying a promotion is the explicit operator action in
``apps.students.services.promotion``.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import UUID

from django.utils import timezone

from apps.attendance.models import AttendanceRecord
from apps.attendance.services import list_since, read_card_token
from apps.billing.services import MonthStanding, get_month_standing
from apps.students.models import Student
from apps.students.services import get_student_by_id, find_active_by_id, StudentNotFoundError
from apps.students.snapshots import StudentSnapshot
from config.club import get_club_config

from .evaluator import ProgressResult, evaluate_progress
from .exceptions import StudentProgressNotFoundError, CardTokenInvalidError

logger = logging.getLogger(__name__)


def get_student_progress(*, student_id: UUID, now=None, config=None) -> ProgressResult:
    """
    Evaluate one student's progress towards the next award.

    Only valid attendance at or after ``belt_since`` is counted.

    Raises:
        StudentProgressNotFoundError: If the student doesn't exist
    """
    try:
        student = get_student_by_id(student_id=student_id)
    except StudentNotFoundError:
        raise StudentProgressNotFoundError()

    snapshot = StudentSnapshot.from_model(student)
    timestamps = [
        record.attended_at
        for record in list_since(student_id=student.id, since=snapshot.belt_since)
    ]
    return evaluate_progress(snapshot, timestamps, config or get_club_config(), now=now)


def list_progress_alerts(*, now=None, config=None, belt: Optional[str] = None) -> list[ProgressResult]:
    """
    Evaluate every active student and keep those worth an operator's look.

    A student is listed when ``alert`` or ``ready_for_degree`` is set.
    Students ready for an award come first, then by progress.

    Args:
        now (datetime, optional): Evaluation instant.
        config (ClubConfig, optional): Defaults to the settings config.
        belt (str, optional): Only students holding this belt.
    """
    now = now or timezone.now()
    config = config or get_club_config()

    students = Student.objects.filter(active=True)
    if belt:
        students = students.filter(current_belt=belt)
    snapshots = [StudentSnapshot.from_model(student) for student in students]
    if not snapshots:
        return []

    # One query for every student's attendance since the earliest belt_since
    earliest = min(snapshot.belt_since for snapshot in snapshots)
    timestamps_by_student = {}
    for student_id, attended_at in (
        AttendanceRecord.objects
        .filter(student__in=students, is_valid=True, attended_at__gte=earliest)
        .values_list('student_id', 'attended_at')
    ):
        timestamps_by_student.setdefault(student_id, []).append(attended_at)

    results = []
    for snapshot in snapshots:
        timestamps = [
            ts for ts in timestamps_by_student.get(snapshot.id, [])
            if ts >= snapshot.belt_since
        ]
        result = evaluate_progress(snapshot, timestamps, config, now=now)
        if result.alert or result.ready_for_degree:
            results.append(result)

    results.sort(key=lambda r: (not r.ready_for_degree, -r.progress_percent))
    logger.debug("Progress alerts evaluated for %d students, %d listed", len(snapshots), len(results))
    return results


@dataclass(frozen=True)
class CardStatus:
    """What a student sees after scanning their own card."""
    student: Student
    progress: ProgressResult
    standing: MonthStanding
    classes_this_month: int

    @property
    def month_start(self) -> date:
        return self.standing.month_start


def get_card_status(*, scanned_token: str, now=None) -> CardStatus:
    """
    Resolve a signed card and report the student's standing.

    Only signed tokens are accepted; a raw student id is not.

    Returns the rank progress, the payment standing of the current month
    and the number of valid classes attended this month.

    Raises:
        CardTokenInvalidError: If the token is missing, tampered with or expired
        StudentProgressNotFoundError: If the student is unknown or inactive
    """
    student_id = read_card_token(scanned_token)
    if student_id is None:
        raise CardTokenInvalidError()

    student = find_active_by_id(student_id=student_id)
    if student is None:
        raise StudentProgressNotFoundError()

    now = now or timezone.now()
    today = timezone.localdate(now)
    progress = get_student_progress(student_id=student.id, now=now)
    standing = get_month_standing(student_id=student.id, today=today)
    classes_this_month = AttendanceRecord.objects.filter(
        student=student,
        is_valid=True,
        attended_at__date__gte=standing.month_start,
        attended_at__date__lte=standing.month_end,
    ).count()

    logger.debug("Card status served for student %s", student.id)
    return CardStatus(
        student=student,
        progress=progress,
        standing=standing,
        classes_this_month=classes_this_month,
    )
