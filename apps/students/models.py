from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone
import uuid


class Belt(models.TextChoices):
    """Ranks in promotion order."""
    WHITE = 'Branca', 'White'
    BLUE = 'Azul', 'Blue'
    PURPLE = 'Roxa', 'Purple'
    BROWN = 'Marrom', 'Brown'
    BLACK = 'Preta', 'Black'


BELT_ORDER = tuple(Belt.values)
MAX_DEGREE = 4


def next_belt(belt):
    """Return the rank after ``belt``, or None at the top rank or for unknown values."""
    try:
        idx = BELT_ORDER.index(belt)
    except ValueError:
        return None
    if idx == len(BELT_ORDER) - 1:
        return None
    return BELT_ORDER[idx + 1]


class Student(models.Model):
    """Academy student with current rank state."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    full_name = models.CharField(max_length=200, db_index=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=40, blank=True)

    active = models.BooleanField(default=True)

    # Rank state
    current_belt = models.CharField(max_length=20, choices=Belt.choices, default=Belt.WHITE)
    current_degree = models.PositiveSmallIntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(MAX_DEGREE)]
    )
    belt_since = models.DateTimeField(default=timezone.now)

    # Counters (recomputable from attendance records)
    total_classes = models.PositiveIntegerField(default=0)
    belt_lessons = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'students'
        indexes = [
            models.Index(fields=['active', 'full_name']),
            models.Index(fields=['current_belt', 'current_degree']),
        ]
        ordering = ['full_name']

    def __str__(self):
        return f"{self.full_name} ({self.get_current_belt_display()} {self.current_degree})"


class BeltHistory(models.Model):
    """Append-only log of awarded degrees and belts."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name='belt_history'
    )
    belt = models.CharField(max_length=20, choices=Belt.choices)
    degree = models.PositiveSmallIntegerField()
    awarded_at = models.DateTimeField(default=timezone.now)
    awarded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='awarded_ranks'
    )
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'belt_history'
        indexes = [
            models.Index(fields=['student', 'awarded_at']),
        ]
        ordering = ['-awarded_at']
        verbose_name_plural = 'belt history'

    def __str__(self):
        return f"{self.student.full_name}: {self.get_belt_display()} {self.degree}"
