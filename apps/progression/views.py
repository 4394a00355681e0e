from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from .serializers import ProgressResultSerializer, AlertFilterSerializer, CardStatusSerializer
from .services import get_student_progress, list_progress_alerts, get_card_status


@extend_schema(
    responses={200: ProgressResultSerializer},
    description="Readiness of one student for the next degree or belt.",
    tags=['progression'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def student_progress(request, student_id):
    """Get a student's progress - thin HTTP handler."""
    result = get_student_progress(student_id=student_id)
    return Response(ProgressResultSerializer(result).data)


@extend_schema(
    parameters=[
        OpenApiParameter('belt', OpenApiTypes.STR, description="Only students holding this belt"),
    ],
    responses={200: ProgressResultSerializer(many=True)},
    description="Active students close to or ready for their next award.",
    tags=['progression'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def progress_alerts(request):
    """List progression alerts - thin HTTP handler."""
    query_serializer = AlertFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    results = list_progress_alerts(belt=query_serializer.validated_data.get('belt'))
    return Response(ProgressResultSerializer(results, many=True).data)


@extend_schema(
    parameters=[
        OpenApiParameter('t', OpenApiTypes.STR, required=True, description="Signed token printed on the card"),
    ],
    responses={200: CardStatusSerializer},
    description="Public status of the student who owns a signed card. No login required.",
    tags=['progression'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def card_status(request):
    """Get the status behind a scanned card - thin HTTP handler."""
    card = get_card_status(scanned_token=request.query_params.get('t', ''))
    return Response(CardStatusSerializer(card).data)
