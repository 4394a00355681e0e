"""Attendance record queries and writes used by check-in and progression."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from ..exceptions import AttendanceNotFoundError, AttendanceAlreadyVoidedError
from ..models import AttendanceRecord


def count_in_session(*, session_id: str) -> int:
    """Valid attendance already recorded for a session."""
    if not session_id:
        return 0
    return AttendanceRecord.objects.filter(session_id=session_id, is_valid=True).count()


def most_recent_valid(*, student_id: UUID, since: datetime) -> Optional[datetime]:
    """Timestamp of the student's latest valid attendance at or after ``since``."""
    return (
        AttendanceRecord.objects
        .filter(student_id=student_id, is_valid=True, attended_at__gte=since)
        .order_by('-attended_at')
        .values_list('attended_at', flat=True)
        .first()
    )


def insert(*, student, attended_at=None, session_id='', source, recorded_by=None) -> AttendanceRecord:
    """Write one attendance record tagged with the rank the student holds now."""
    return AttendanceRecord.objects.create(
        student=student,
        attended_at=attended_at or timezone.now(),
        session_id=session_id or '',
        belt_at_checkin=student.current_belt,
        degree_at_checkin=student.current_degree,
        source=source,
        recorded_by=recorded_by,
    )


def list_since(*, student_id: UUID, since: datetime) -> list:
    """Valid attendance of a student at or after ``since``, oldest first."""
    return list(
        AttendanceRecord.objects
        .filter(student_id=student_id, is_valid=True, attended_at__gte=since)
        .order_by('attended_at')
    )


@transaction.atomic
def void_record(*, attendance_id: UUID) -> AttendanceRecord:
    """
    Mark an attendance record invalid.

    Lifetime and belt counters are decremented for records that still count
    towards the current belt.

    Raises:
        AttendanceNotFoundError: If the record doesn't exist
        AttendanceAlreadyVoidedError: If it was voided before
    """
    try:
        record = (
            AttendanceRecord.objects
            .select_for_update()
            .select_related('student')
            .get(id=attendance_id)
        )
    except AttendanceRecord.DoesNotExist:
        raise AttendanceNotFoundError(f"Attendance {attendance_id} not found")

    if not record.is_valid:
        raise AttendanceAlreadyVoidedError("Attendance record is already voided")

    record.is_valid = False
    record.save(update_fields=['is_valid'])

    student = record.student
    counts_for_belt = student.belt_since is None or record.attended_at >= student.belt_since
    student.total_classes = max(0, student.total_classes - 1)
    if counts_for_belt:
        student.belt_lessons = max(0, student.belt_lessons - 1)
    student.save(update_fields=['total_classes', 'belt_lessons', 'updated_at'])

    return record
