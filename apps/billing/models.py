from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid


class PaymentStatus(models.TextChoices):
    UNPAID = 'unpaid', 'Unpaid'
    PAID = 'paid', 'Paid'


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    CARD = 'card', 'Card'
    TRANSFER = 'transfer', 'Transfer'
    PIX = 'pix', 'Pix'
    OTHER = 'other', 'Other'


class Payment(models.Model):
    """One billing period's obligation for a student."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(
        'students.Student',
        on_delete=models.CASCADE,
        related_name='payments'
    )

    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Billing period; end_date is the due date
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)

    status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID
    )
    paid_at = models.DateTimeField(null=True, blank=True)
    method = models.CharField(max_length=20, choices=PaymentMethod.choices, blank=True)
    notes = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        indexes = [
            models.Index(fields=['student', 'start_date']),
            models.Index(fields=['status', 'end_date']),
        ]
        ordering = ['-start_date', '-created_at']

    def __str__(self):
        return f"{self.student.full_name} {self.start_date:%Y-%m} ({self.status})"

    def mark_paid(self, paid_at=None, method=None):
        """Mark payment as paid."""
        self.status = PaymentStatus.PAID
        self.paid_at = paid_at or timezone.now()
        if method:
            self.method = method
        self.save(update_fields=['status', 'paid_at', 'method', 'updated_at'])


class PaymentStanding(models.TextChoices):
    """Financial standing derived from the month's authoritative payment."""
    PAID = 'paid', 'Paid'
    PENDING = 'pending', 'Pending'
    LATE = 'late', 'Late'
    DELINQUENT = 'delinquent', 'Delinquent'
