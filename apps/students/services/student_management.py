"""
Student store service.

Lookups and rank/counter writes used by check-in and promotion. Counters
are updated with F() expressions so concurrent check-ins never lose an
increment.
"""

from uuid import UUID

from django.core.exceptions import ValidationError
from django.db.models import F
from django.utils import timezone

from apps.students.models import Student, BELT_ORDER, MAX_DEGREE

from .exceptions import StudentNotFoundError, InvalidRankStateError


def get_student_by_id(*, student_id: UUID, for_update: bool = False) -> Student:
    """
    Retrieve a student regardless of active state.

    Args:
        student_id: UUID of the student
        for_update: Lock the row (caller must be inside a transaction)

    Raises:
        StudentNotFoundError: If student doesn't exist
    """
    queryset = Student.objects.all()
    if for_update:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(id=student_id)
    except (Student.DoesNotExist, ValueError, ValidationError):
        raise StudentNotFoundError(f"Student with ID {student_id} not found")


def find_active_by_id(*, student_id: UUID, for_update: bool = False):
    """Return the student if it exists and is active, otherwise None."""
    try:
        student = get_student_by_id(student_id=student_id, for_update=for_update)
    except StudentNotFoundError:
        return None
    return student if student.active else None


def update_rank_state(*, student: Student, belt: str, degree: int, belt_since=None) -> Student:
    """
    Write a new belt/degree on the student and restart the lesson counter.

    Raises:
        InvalidRankStateError: If belt is unknown or degree out of range
    """
    if belt not in BELT_ORDER:
        raise InvalidRankStateError(f"Unknown belt: {belt}")
    if not 0 <= degree <= MAX_DEGREE:
        raise InvalidRankStateError(f"Degree must be between 0 and {MAX_DEGREE}")

    student.current_belt = belt
    student.current_degree = degree
    student.belt_since = belt_since or timezone.now()
    student.belt_lessons = 0
    student.save(update_fields=[
        'current_belt', 'current_degree', 'belt_since', 'belt_lessons', 'updated_at'
    ])
    return student


def increment_counters(*, student_id: UUID, total: int = 1, belt_lessons: int = 1) -> int:
    """
    Increment lifetime and belt-scoped class counters.

    Returns:
        Number of rows updated (0 if the student vanished)
    """
    return Student.objects.filter(id=student_id).update(
        total_classes=F('total_classes') + total,
        belt_lessons=F('belt_lessons') + belt_lessons,
        updated_at=timezone.now(),
    )
