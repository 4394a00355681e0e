"""
Progression Evaluator
======================

Computes a student's readiness for the next degree or belt from the
attendance recorded since the start of the current rank.

Functions:
    evaluate_progress: Build a ProgressResult for one student.
    next_rank: The (belt, degree) the next award would produce.
    filter_attendance_since: Keep timestamps at or after a cut-off.

Rules:
    - A degree is earned when the attendance count reaches
      ``classes_per_degree[belt]`` OR the months at the current rank reach
      ``months_per_degree[belt]``. Either path qualifies.
    - Months are approximated as 30-day blocks.
    - At the maximum degree the next award is a belt promotion with the
      degree reset to 0; at the top belt there is nothing left to award.
    - ``alert`` flags students at or above ``alert_threshold_percent`` of the
      required classes, possibly before they are ready.

Example:
    Evaluating a student::

        from apps.progression.evaluator import evaluate_progress
        from config.club import get_club_config

        result = evaluate_progress(snapshot, timestamps, get_club_config())
        if result.alert:
            ...

Note:
    Everything here is pure: no database access, no writes. Evaluating the
    same inputs twice yields identical results.
"""

from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import Iterable, Optional

from django.utils import timezone

from apps.students.models import next_belt

MONTH_APPROXIMATION = timedelta(days=30)


@dataclass(frozen=True)
class ProgressResult:
    student_id: object
    current_belt: str
    current_degree: int
    attended_since_belt: int
    required_for_next_degree: int
    months_required: int
    months_at_belt: int
    ready_for_degree: bool
    ready_for_belt_promotion: bool
    alert: bool
    next_degree_if_awarded: int
    next_belt_if_promoted: Optional[str]
    progress_percent: int

    def to_dict(self):
        return asdict(self)


def next_rank(belt: str, degree: int, max_degree: int = 4):
    """
    Return the (belt, degree) an award would produce, or None at the top rank.

    Below ``max_degree`` the degree increments; at ``max_degree`` the belt
    advances and the degree resets to 0.
    """
    if degree < max_degree:
        return belt, degree + 1
    promoted = next_belt(belt)
    if promoted is None:
        return None
    return promoted, 0


def filter_attendance_since(since: datetime, timestamps: Iterable[datetime]) -> list:
    """Keep the timestamps at or after ``since``."""
    return [ts for ts in timestamps if ts >= since]


def months_between(start: datetime, end: datetime) -> int:
    """Whole 30-day blocks from ``start`` to ``end`` (never negative)."""
    if start is None or end < start:
        return 0
    return (end - start) // MONTH_APPROXIMATION


def evaluate_progress(student, attendance_since_belt, config, max_degree=None, now=None) -> ProgressResult:
    """
    Evaluate a student's progress towards the next award.

    Args:
        student: Snapshot with ``id``, ``current_belt``, ``current_degree``
            and ``belt_since``.
        attendance_since_belt: Attendance timestamps at or after
            ``belt_since``; only their count is used.
        config (ClubConfig): Academy thresholds.
        max_degree (int, optional): Degrees per belt. Defaults to
            ``config.max_degree``.
        now (datetime, optional): Evaluation instant. Defaults to now.

    Returns:
        ProgressResult
    """
    now = now or timezone.now()
    if max_degree is None:
        max_degree = config.max_degree

    attended = len(attendance_since_belt)
    required = config.required_classes(student.current_belt)
    months_required = config.required_months(student.current_belt)
    months_at_belt = months_between(student.belt_since, now)

    ready_for_degree = attended >= required or months_at_belt >= months_required

    degree = student.current_degree
    rank = next_rank(student.current_belt, degree, max_degree)
    if rank is None:
        # Top belt at max degree: degree would reset, belt stays
        next_degree, promoted_belt = 0, None
    elif rank[0] != student.current_belt:
        promoted_belt, next_degree = rank
    else:
        next_degree, promoted_belt = rank[1], None

    ready_for_belt_promotion = (
        ready_for_degree
        and degree == max_degree
        and promoted_belt is not None
    )

    alert = required > 0 and attended / required >= config.alert_threshold_percent
    progress_percent = min(100, round(attended / max(1, required) * 100))

    return ProgressResult(
        student_id=student.id,
        current_belt=student.current_belt,
        current_degree=degree,
        attended_since_belt=attended,
        required_for_next_degree=required,
        months_required=months_required,
        months_at_belt=months_at_belt,
        ready_for_degree=ready_for_degree,
        ready_for_belt_promotion=ready_for_belt_promotion,
        alert=alert,
        next_degree_if_awarded=next_degree,
        next_belt_if_promoted=promoted_belt,
        progress_percent=progress_percent,
    )
