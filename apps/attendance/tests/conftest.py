import pytest
from datetime import timedelta
from decimal import Decimal
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.attendance.models import AttendanceRecord, CheckInSource
from apps.billing.models import Payment, PaymentStatus
from apps.billing.services import current_month_range
from apps.students.models import Student, Belt


User = get_user_model()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def operator(db):
    """Create and return a front-desk operator."""
    return User.objects.create_user(
        username='operator',
        email='operator@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def operator_client(api_client, operator):
    """Return API client authenticated as operator."""
    refresh = RefreshToken.for_user(operator)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def student(db):
    """Create and return an active blue belt with no payment this month."""
    return Student.objects.create(
        full_name='Ana Souza',
        current_belt=Belt.BLUE,
        current_degree=1,
        belt_since=timezone.now() - timedelta(days=90),
        total_classes=50,
        belt_lessons=10,
    )


@pytest.fixture
def inactive_student(db):
    """Create and return an inactive student."""
    return Student.objects.create(full_name='Diego Alves', active=False)


@pytest.fixture
def month_start():
    return current_month_range(timezone.localdate())[0]


@pytest.fixture
def paid_month(student, month_start):
    """Mark the student's current month as paid."""
    return Payment.objects.create(
        student=student,
        amount=Decimal('250.00'),
        start_date=month_start,
        end_date=month_start + timedelta(days=9),
        status=PaymentStatus.PAID,
        paid_at=timezone.now(),
    )


@pytest.fixture
def delinquent_month(student, month_start):
    """Leave the student's current month unpaid well past the grace period."""
    return Payment.objects.create(
        student=student,
        amount=Decimal('250.00'),
        start_date=month_start,
        end_date=timezone.localdate() - timedelta(days=10),
    )


@pytest.fixture
def recent_attendance(student):
    """Create a valid attendance 30 minutes ago."""
    return AttendanceRecord.objects.create(
        student=student,
        attended_at=timezone.now() - timedelta(minutes=30),
        belt_at_checkin=student.current_belt,
        degree_at_checkin=student.current_degree,
        source=CheckInSource.MANUAL,
    )


@pytest.fixture
def old_attendance(student):
    """Create a valid attendance three hours ago."""
    return AttendanceRecord.objects.create(
        student=student,
        attended_at=timezone.now() - timedelta(hours=3),
        belt_at_checkin=student.current_belt,
        degree_at_checkin=student.current_degree,
        source=CheckInSource.MANUAL,
    )
