import pytest
from unittest.mock import patch
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status

from apps.attendance.models import AttendanceRecord
from apps.attendance.services import make_card_token


# =============================================================================
# Check-in Tests
# =============================================================================

@pytest.mark.django_db
class TestCheckIn:
    """Tests for POST /api/attendance/checkin/"""

    def test_accepted(self, operator_client, student, paid_month):
        url = reverse('attendance:checkin')
        response = operator_client.post(url, {'student_id': str(student.id)}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['decision'] == 'accepted'
        assert response.data['code'] == 'accepted'
        assert response.data['payment_status'] == 'paid'
        assert str(response.data['attendance']['student']) == str(student.id)
        assert response.data['message']

    def test_warning_for_pending_payment(self, operator_client, student):
        url = reverse('attendance:checkin')
        response = operator_client.post(url, {'student_id': str(student.id)}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['decision'] == 'warning'
        assert response.data['code'] == 'financial_pending'
        assert response.data['payment_status'] == 'pending'

    def test_scanned_card(self, operator_client, student, paid_month):
        url = reverse('attendance:checkin')
        response = operator_client.post(url, {
            'scanned_token': make_card_token(student.id),
            'session_id': 'mon-19h',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['attendance']['source'] == 'scan'
        assert response.data['attendance']['session_id'] == 'mon-19h'

    def test_missing_identifier(self, operator_client):
        url = reverse('attendance:checkin')
        response = operator_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_request'
        assert response.data['attendance'] is None

    def test_inactive_student(self, operator_client, inactive_student):
        url = reverse('attendance:checkin')
        response = operator_client.post(url, {'student_id': str(inactive_student.id)}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found_or_inactive'
        assert AttendanceRecord.objects.count() == 0

    def test_delinquent(self, operator_client, student, delinquent_month):
        url = reverse('attendance:checkin')
        response = operator_client.post(url, {'student_id': str(student.id)}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'blocked_financial'
        assert response.data['payment_status'] == 'delinquent'

    def test_duplicate(self, operator_client, student, paid_month, recent_attendance):
        url = reverse('attendance:checkin')
        response = operator_client.post(url, {'student_id': str(student.id)}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'duplicate_window'

    def test_transient_failure(self, operator_client, student):
        url = reverse('attendance:checkin')
        with patch(
            'apps.attendance.services.checkin.find_for_period',
            side_effect=DatabaseError('connection lost'),
        ):
            response = operator_client.post(url, {'student_id': str(student.id)}, format='json')

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['code'] == 'unavailable'
        assert 'error' in response.data

    def test_unauthenticated(self, api_client, student):
        url = reverse('attendance:checkin')
        response = api_client.post(url, {'student_id': str(student.id)}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Attendance Record Tests
# =============================================================================

@pytest.mark.django_db
class TestAttendanceRecords:
    """Tests for /api/attendance/records/"""

    def test_list_records(self, operator_client, recent_attendance, old_attendance):
        url = reverse('attendance:record-list')
        response = operator_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        ids = [r['id'] for r in response.data['results']]
        assert ids == [str(recent_attendance.id), str(old_attendance.id)]
        assert response.data['results'][0]['student_name'] == 'Ana Souza'

    def test_voided_records_hidden_by_default(self, operator_client, recent_attendance, old_attendance):
        recent_attendance.is_valid = False
        recent_attendance.save()

        url = reverse('attendance:record-list')
        response = operator_client.get(url)
        assert [r['id'] for r in response.data['results']] == [str(old_attendance.id)]

        response = operator_client.get(url, {'include_voided': 'true'})
        assert len(response.data['results']) == 2

    def test_filter_by_session(self, operator_client, recent_attendance, old_attendance):
        old_attendance.session_id = 'mon-19h'
        old_attendance.save()

        url = reverse('attendance:record-list')
        response = operator_client.get(url, {'session_id': 'mon-19h'})

        assert [r['id'] for r in response.data['results']] == [str(old_attendance.id)]

    def test_filter_rejects_reversed_range(self, operator_client):
        url = reverse('attendance:record-list')
        response = operator_client.get(url, {
            'since': '2025-03-20T10:00:00Z',
            'until': '2025-03-19T10:00:00Z',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_void(self, operator_client, recent_attendance):
        url = reverse('attendance:record-void', kwargs={'pk': recent_attendance.id})
        response = operator_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_valid'] is False

    def test_void_twice(self, operator_client, recent_attendance):
        url = reverse('attendance:record-void', kwargs={'pk': recent_attendance.id})
        operator_client.post(url)
        response = operator_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_void_unknown(self, operator_client):
        url = reverse('attendance:record-void', kwargs={'pk': '00000000-0000-0000-0000-000000000000'})
        response = operator_client.post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
