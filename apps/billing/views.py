from datetime import date

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.students.models import Student
from .models import Payment
from .serializers import (
    PaymentSerializer,
    MonthStandingSerializer,
    # Input serializers
    PaymentFilterSerializer,
    MarkPaidInputSerializer,
    StandingFilterSerializer,
)
from .services import get_month_standing, list_month_standings, mark_paid, current_month_range


class PaymentPagination(PageNumberPagination):
    """Custom pagination for payments."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PaymentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Payment CRUD operations.

    list: Get payments (filterable by student, status, month)
    create: Record a payment obligation
    retrieve: Get a specific payment
    update: Correct a payment
    destroy: Delete a payment
    """

    queryset = Payment.objects.select_related('student')
    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = PaymentPagination

    def get_queryset(self):
        """Filter payments using input serializer validation."""
        queryset = super().get_queryset()

        filter_serializer = PaymentFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'student' in params:
            queryset = queryset.filter(student_id=params['student'])
        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'month' in params:
            year, month = (int(part) for part in params['month'].split('-'))
            month_start, month_end = current_month_range(date(year, month, 1))
            queryset = queryset.filter(start_date__gte=month_start, start_date__lte=month_end)

        return queryset

    @action(detail=True, methods=['post'])
    def mark_paid(self, request, pk=None):
        """
        Mark a payment as paid.

        POST /api/billing/payments/{id}/mark_paid/
        Body: {"paid_at": "optional ISO datetime", "method": "optional"}
        """
        payment = self.get_object()

        input_serializer = MarkPaidInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        payment = mark_paid(
            payment_id=payment.id,
            paid_at=input_serializer.validated_data.get('paid_at'),
            method=input_serializer.validated_data.get('method'),
        )

        return Response(PaymentSerializer(payment).data)


@extend_schema(
    responses={200: MonthStandingSerializer},
    description="Current-month financial standing of one student.",
    tags=['billing'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def student_standing(request, student_id):
    """Get a student's standing for the current month - thin HTTP handler."""
    get_object_or_404(Student, id=student_id)

    standing = get_month_standing(student_id=student_id)
    return Response(MonthStandingSerializer(standing).data)


@extend_schema(
    parameters=[
        OpenApiParameter('status', OpenApiTypes.STR, description="Filter by standing: paid, pending, late, delinquent"),
    ],
    responses={200: MonthStandingSerializer(many=True)},
    description="Current-month standing of every active student.",
    tags=['billing'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def month_standings(request):
    """List current-month standings - thin HTTP handler."""
    query_serializer = StandingFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    standings = list_month_standings(status=query_serializer.validated_data.get('status'))
    return Response(MonthStandingSerializer(standings, many=True).data)
