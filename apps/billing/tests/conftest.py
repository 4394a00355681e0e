import pytest
from datetime import timedelta
from decimal import Decimal
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.billing.models import Payment, PaymentStatus
from apps.billing.services import current_month_range
from apps.students.models import Student


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
    """Create and return an active student."""
    return Student.objects.create(full_name='Ana Souza')


@pytest.fixture
def other_student(db):
    """Create and return a second active student."""
    return Student.objects.create(full_name='Bruno Lima')


@pytest.fixture
def this_month():
    """Return (first_day, last_day) of the current month."""
    return current_month_range(timezone.localdate())


@pytest.fixture
def unpaid_payment(student, this_month):
    """Create and return an unpaid payment for the current month."""
    month_start, month_end = this_month
    return Payment.objects.create(
        student=student,
        amount=Decimal('250.00'),
        start_date=month_start,
        end_date=month_end,
    )


@pytest.fixture
def paid_payment(other_student, this_month):
    """Create and return a paid payment for the current month."""
    month_start, month_end = this_month
    return Payment.objects.create(
        student=other_student,
        amount=Decimal('250.00'),
        start_date=month_start,
        end_date=month_start + timedelta(days=9),
        status=PaymentStatus.PAID,
        paid_at=timezone.now(),
    )
