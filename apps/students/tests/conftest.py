import pytest
from datetime import timedelta
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.students.models import Student, BeltHistory, Belt


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
    """Create and return a white belt student."""
    return Student.objects.create(
        full_name='Ana Souza',
        email='ana@example.com',
        current_belt=Belt.WHITE,
        current_degree=2,
        belt_since=timezone.now() - timedelta(days=40),
        total_classes=35,
        belt_lessons=12,
    )


@pytest.fixture
def max_degree_student(db):
    """Create and return a blue belt at the last degree."""
    return Student.objects.create(
        full_name='Bruno Lima',
        current_belt=Belt.BLUE,
        current_degree=4,
        belt_since=timezone.now() - timedelta(days=400),
    )


@pytest.fixture
def black_belt(db):
    """Create and return a student holding the top rank."""
    return Student.objects.create(
        full_name='Carla Mendes',
        current_belt=Belt.BLACK,
        current_degree=4,
        belt_since=timezone.now() - timedelta(days=1200),
    )


@pytest.fixture
def inactive_student(db):
    """Create and return an inactive student."""
    return Student.objects.create(
        full_name='Diego Alves',
        active=False,
    )


@pytest.fixture
def history_entry(student, operator):
    """Create and return an award history entry."""
    return BeltHistory.objects.create(
        student=student,
        belt=Belt.WHITE,
        degree=2,
        awarded_by=operator,
        notes='Stripe after open mat',
    )
