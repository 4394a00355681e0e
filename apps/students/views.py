from django.db.models import Q
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.attendance.services import make_card_token
from .models import Student
from .serializers import (
    StudentSerializer,
    StudentListSerializer,
    BeltHistorySerializer,
    PromotionResultSerializer,
    CardTokenSerializer,
    # Input serializers
    StudentFilterSerializer,
    PromoteInputSerializer,
)
from .services import (
    apply_promotion,
    get_belt_history,
    AlreadyAtTopRankError,
    InvalidRankStateError,
    StudentNotFoundError,
)


class StudentPagination(PageNumberPagination):
    """Custom pagination for students."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class StudentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Student CRUD operations.

    list: Get students (filterable by active flag, belt, search)
    create: Enroll a student
    retrieve: Get a specific student
    update: Update contact details or active flag
    destroy: Delete a student
    promote: Apply the next degree or belt
    history: Award history
    card: Signed card token
    """

    queryset = Student.objects.all()
    permission_classes = [IsAuthenticated]
    pagination_class = StudentPagination

    def get_serializer_class(self):
        if self.action == 'list':
            return StudentListSerializer
        return StudentSerializer

    def get_queryset(self):
        """Filter students using input serializer validation."""
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filter_serializer = StudentFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if params.get('active') is not None:
            queryset = queryset.filter(active=params['active'])
        if 'belt' in params:
            queryset = queryset.filter(current_belt=params['belt'])
        if params.get('search'):
            search = params['search']
            queryset = queryset.filter(
                Q(full_name__icontains=search) | Q(email__icontains=search)
            )

        return queryset

    @extend_schema(request=PromoteInputSerializer, responses={201: PromotionResultSerializer})
    @action(detail=True, methods=['post'])
    def promote(self, request, pk=None):
        """
        Award the next degree or belt.

        POST /api/students/{id}/promote/
        Body: {"notes": "optional"}
        """
        student = self.get_object()

        input_serializer = PromoteInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            student, history = apply_promotion(
                student_id=student.id,
                awarded_by=request.user,
                notes=input_serializer.validated_data.get('notes', ''),
            )
        except StudentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (AlreadyAtTopRankError, InvalidRankStateError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output = PromotionResultSerializer({'student': student, 'history': history})
        return Response(output.data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: BeltHistorySerializer(many=True)})
    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        """
        Award history, newest first.

        GET /api/students/{id}/history/
        """
        student = self.get_object()
        entries = get_belt_history(student_id=student.id)
        return Response(BeltHistorySerializer(entries, many=True).data)

    @extend_schema(responses={200: CardTokenSerializer})
    @action(detail=True, methods=['get'])
    def card(self, request, pk=None):
        """
        Signed token to print on the student's card.

        GET /api/students/{id}/card/
        """
        student = self.get_object()
        output = CardTokenSerializer({'student_id': student.id, 'token': make_card_token(student.id)})
        return Response(output.data)
