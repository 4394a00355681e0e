import pytest
from datetime import timedelta
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.attendance.models import AttendanceRecord
from apps.students.models import Student, Belt


User = get_user_model()


def _add_attendance(student, count, start, step=timedelta(days=1), is_valid=True):
    """Create ``count`` attendance records for a student, one per step from ``start``."""
    return [
        AttendanceRecord.objects.create(
            student=student,
            attended_at=start + step * i,
            belt_at_checkin=student.current_belt,
            degree_at_checkin=student.current_degree,
            is_valid=is_valid,
        )
        for i in range(count)
    ]


@pytest.fixture
def add_attendance(db):
    """Return a helper that creates attendance records."""
    return _add_attendance


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
def ready_student(db):
    """White belt, degree 2, 40 days at rank with 20 classes since."""
    student = Student.objects.create(
        full_name='Ana Souza',
        current_belt=Belt.WHITE,
        current_degree=2,
        belt_since=timezone.now() - timedelta(days=40),
    )
    _add_attendance(student, 20, student.belt_since + timedelta(hours=1))
    return student


@pytest.fixture
def close_student(db):
    """White belt with 18 of 20 classes: alert but not ready."""
    student = Student.objects.create(
        full_name='Bruno Lima',
        current_belt=Belt.WHITE,
        current_degree=0,
        belt_since=timezone.now() - timedelta(days=40),
    )
    _add_attendance(student, 18, student.belt_since + timedelta(hours=1))
    return student


@pytest.fixture
def new_student(db):
    """Recently enrolled student with a few classes."""
    student = Student.objects.create(
        full_name='Carla Mendes',
        belt_since=timezone.now() - timedelta(days=10),
    )
    _add_attendance(student, 3, student.belt_since + timedelta(hours=1))
    return student
