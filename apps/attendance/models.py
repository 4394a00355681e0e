from django.conf import settings
from django.db import models
from django.utils import timezone
import uuid

from apps.students.models import Belt


class CheckInSource(models.TextChoices):
    MANUAL = 'manual', 'Manual'
    SCAN = 'scan', 'QR scan'


class AttendanceRecord(models.Model):
    """A single admitted check-in. Never mutated except for voiding."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(
        'students.Student',
        on_delete=models.CASCADE,
        related_name='attendances'
    )
    attended_at = models.DateTimeField(default=timezone.now, db_index=True)

    # Class/session grouping used for capacity control
    session_id = models.CharField(max_length=64, blank=True, db_index=True)

    # Rank held when checking in
    belt_at_checkin = models.CharField(max_length=20, choices=Belt.choices)
    degree_at_checkin = models.PositiveSmallIntegerField(default=0)

    source = models.CharField(
        max_length=10,
        choices=CheckInSource.choices,
        default=CheckInSource.MANUAL
    )

    # Voided records are ignored by duplicate checks and progression
    is_valid = models.BooleanField(default=True)
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recorded_attendances'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'attendances'
        indexes = [
            models.Index(fields=['student', 'is_valid', 'attended_at']),
            models.Index(fields=['session_id', 'is_valid']),
        ]
        ordering = ['-attended_at']

    def __str__(self):
        return f"{self.student.full_name} @ {self.attended_at:%Y-%m-%d %H:%M}"
