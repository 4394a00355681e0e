from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .exceptions import (
    AttendanceNotFoundError,
    AttendanceAlreadyVoidedError,
    AdmissionUnavailableError,
)
from .models import AttendanceRecord
from .serializers import (
    AttendanceRecordSerializer,
    CheckInResultSerializer,
    # Input serializers
    CheckInInputSerializer,
    AttendanceFilterSerializer,
)
from .services import check_in, void_record, AdmissionCode, AdmissionOutcome


BLOCKED_STATUS = {
    AdmissionCode.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    AdmissionCode.NOT_FOUND_OR_INACTIVE: status.HTTP_404_NOT_FOUND,
}


class AttendancePagination(PageNumberPagination):
    """Custom pagination for attendance records."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


@extend_schema(
    request=CheckInInputSerializer,
    responses={
        201: CheckInResultSerializer,
        400: CheckInResultSerializer,
        404: CheckInResultSerializer,
        409: CheckInResultSerializer,
    },
    description=(
        "Check a student into a session. Accepted and warning outcomes record "
        "attendance (201); blocked outcomes return the stable code."
    ),
    tags=['attendance'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def checkin(request):
    """Check-in - thin HTTP handler."""
    serializer = CheckInInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        result = check_in(
            student_id=data.get('student_id') or None,
            scanned_token=data.get('scanned_token') or None,
            session_id=data.get('session_id') or None,
            recorded_by=request.user,
        )
    except AdmissionUnavailableError as e:
        return Response(
            {'error': str(e.detail), 'code': e.default_code},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if result.decision.outcome == AdmissionOutcome.BLOCKED:
        response_status = BLOCKED_STATUS.get(result.decision.code, status.HTTP_409_CONFLICT)
    else:
        response_status = status.HTTP_201_CREATED

    return Response(CheckInResultSerializer(result).data, status=response_status)


class AttendanceRecordViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for attendance records.

    list: Get attendance (filterable by student, session, date range)
    retrieve: Get a specific record
    void: Mark a record invalid
    """

    queryset = AttendanceRecord.objects.select_related('student')
    serializer_class = AttendanceRecordSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = AttendancePagination

    def get_queryset(self):
        """Filter attendance using input serializer validation."""
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filter_serializer = AttendanceFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if not params.get('include_voided'):
            queryset = queryset.filter(is_valid=True)
        if 'student' in params:
            queryset = queryset.filter(student_id=params['student'])
        if 'session_id' in params:
            queryset = queryset.filter(session_id=params['session_id'])
        if 'since' in params:
            queryset = queryset.filter(attended_at__gte=params['since'])
        if 'until' in params:
            queryset = queryset.filter(attended_at__lt=params['until'])

        return queryset

    @action(detail=True, methods=['post'])
    def void(self, request, pk=None):
        """
        Mark an attendance record invalid.

        POST /api/attendance/records/{id}/void/
        """
        record = self.get_object()

        try:
            record = void_record(attendance_id=record.id)
        except AttendanceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AttendanceAlreadyVoidedError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AttendanceRecordSerializer(record).data)
