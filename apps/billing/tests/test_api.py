import pytest
from datetime import date
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.billing.models import Payment, PaymentStatus, PaymentStanding


# =============================================================================
# Payment CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestPaymentList:
    """Tests for GET /api/billing/payments/"""

    def test_list_payments(self, operator_client, unpaid_payment, paid_payment):
        url = reverse('billing:payment-list')
        response = operator_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

    def test_list_unauthenticated(self, api_client):
        url = reverse('billing:payment-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_filter_by_student(self, operator_client, unpaid_payment, paid_payment, student):
        url = reverse('billing:payment-list')
        response = operator_client.get(url, {'student': str(student.id)})

        ids = [p['id'] for p in response.data['results']]
        assert ids == [str(unpaid_payment.id)]

    def test_filter_by_status(self, operator_client, unpaid_payment, paid_payment):
        url = reverse('billing:payment-list')
        response = operator_client.get(url, {'status': PaymentStatus.PAID})

        ids = [p['id'] for p in response.data['results']]
        assert ids == [str(paid_payment.id)]

    def test_filter_by_month(self, operator_client, student):
        march = Payment.objects.create(student=student, start_date=date(2025, 3, 1))
        Payment.objects.create(student=student, start_date=date(2025, 4, 1))

        url = reverse('billing:payment-list')
        response = operator_client.get(url, {'month': '2025-03'})

        ids = [p['id'] for p in response.data['results']]
        assert ids == [str(march.id)]

    def test_filter_rejects_bad_month(self, operator_client):
        url = reverse('billing:payment-list')
        response = operator_client.get(url, {'month': '2025-13'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestPaymentCreate:
    """Tests for POST /api/billing/payments/"""

    def test_create_payment(self, operator_client, student):
        url = reverse('billing:payment-list')
        response = operator_client.post(url, {
            'student': str(student.id),
            'amount': '250.00',
            'start_date': '2025-03-01',
            'end_date': '2025-03-10',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == PaymentStatus.UNPAID
        assert Payment.objects.get(id=response.data['id']).amount == Decimal('250.00')

    def test_create_rejects_reversed_period(self, operator_client, student):
        url = reverse('billing:payment-list')
        response = operator_client.post(url, {
            'student': str(student.id),
            'amount': '250.00',
            'start_date': '2025-03-10',
            'end_date': '2025-03-01',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'end_date' in response.data


@pytest.mark.django_db
class TestMarkPaid:
    """Tests for POST /api/billing/payments/{id}/mark_paid/"""

    def test_mark_paid(self, operator_client, unpaid_payment):
        url = reverse('billing:payment-mark-paid', kwargs={'pk': unpaid_payment.id})
        response = operator_client.post(url, {'method': 'cash'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == PaymentStatus.PAID
        assert response.data['method'] == 'cash'
        assert response.data['paid_at'] is not None

    def test_mark_paid_twice(self, operator_client, paid_payment):
        url = reverse('billing:payment-mark-paid', kwargs={'pk': paid_payment.id})
        response = operator_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Standing Tests
# =============================================================================

@pytest.mark.django_db
class TestStanding:
    """Tests for standing endpoints."""

    def test_student_standing_paid(self, operator_client, paid_payment, other_student):
        url = reverse('billing:student-standing', kwargs={'student_id': other_student.id})
        response = operator_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == PaymentStanding.PAID
        assert response.data['payment']['id'] == str(paid_payment.id)

    def test_student_standing_without_payment(self, operator_client, student):
        url = reverse('billing:student-standing', kwargs={'student_id': student.id})
        response = operator_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == PaymentStanding.PENDING
        assert response.data['payment'] is None

    def test_student_standing_unknown(self, operator_client):
        url = reverse('billing:student-standing', kwargs={'student_id': '00000000-0000-0000-0000-000000000000'})
        response = operator_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_month_standings_filter(self, operator_client, paid_payment, student):
        url = reverse('billing:standings')
        response = operator_client.get(url, {'status': PaymentStanding.PAID})

        assert response.status_code == status.HTTP_200_OK
        assert [s['student_id'] for s in response.data] == [str(paid_payment.student_id)]
