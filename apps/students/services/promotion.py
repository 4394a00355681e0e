"""
Promotion service.

Applies an explicitly requested rank award: the next degree while the
student is below the maximum, otherwise the next belt at degree 0. The
award restarts ``belt_since`` so progress towards the following award is
counted from now.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.progression.evaluator import next_rank
from apps.students.models import Student, BeltHistory
from config.club import get_club_config

from .exceptions import AlreadyAtTopRankError
from .student_management import get_student_by_id, update_rank_state

logger = logging.getLogger(__name__)

DEFAULT_AWARD_NOTE = 'Awarded via operator action'


def compute_next_rank(belt: str, degree: int, max_degree: Optional[int] = None):
    """
    Return the (belt, degree) an award would produce.

    Raises:
        AlreadyAtTopRankError: If the student holds the top belt at max degree
    """
    if max_degree is None:
        max_degree = get_club_config().max_degree
    rank = next_rank(belt, degree, max_degree)
    if rank is None:
        raise AlreadyAtTopRankError("Student is already at top belt/degree")
    return rank


@transaction.atomic
def apply_promotion(
    *,
    student_id: UUID,
    awarded_by=None,
    notes: str = '',
    awarded_at=None,
) -> tuple[Student, BeltHistory]:
    """
    Award the next degree or belt and append a history entry.

    Args:
        student_id: UUID of the student
        awarded_by: Operator user applying the award (optional)
        notes: Free-form note stored on the history entry
        awarded_at: Award timestamp (defaults to now)

    Returns:
        Tuple of (updated Student, created BeltHistory)

    Raises:
        StudentNotFoundError: If student doesn't exist
        AlreadyAtTopRankError: If no further award is possible
    """
    awarded_at = awarded_at or timezone.now()
    student = get_student_by_id(student_id=student_id, for_update=True)

    new_belt, new_degree = compute_next_rank(student.current_belt, student.current_degree)

    update_rank_state(
        student=student,
        belt=new_belt,
        degree=new_degree,
        belt_since=awarded_at,
    )

    history = BeltHistory.objects.create(
        student=student,
        belt=new_belt,
        degree=new_degree,
        awarded_at=awarded_at,
        awarded_by=awarded_by,
        notes=notes or DEFAULT_AWARD_NOTE,
    )

    logger.info(
        "Promoted student %s to %s degree %s",
        student.id, new_belt, new_degree,
    )
    return student, history


def get_belt_history(*, student_id: UUID):
    """Return the student's award history, newest first."""
    get_student_by_id(student_id=student_id)
    return BeltHistory.objects.filter(student_id=student_id).select_related('awarded_by')
