from rest_framework import serializers
from .models import AttendanceRecord


# =============================================================================
# Input Serializers
# =============================================================================

class CheckInInputSerializer(serializers.Serializer):
    """
    Validate input for a check-in attempt.

    Either ``student_id`` (typed by an operator) or ``scanned_token`` (read
    from a card) identifies the student. An attempt with neither is still
    passed to the Admission Controller, which blocks it as an invalid
    request.
    """

    student_id = serializers.CharField(required=False, allow_blank=True, max_length=64)
    scanned_token = serializers.CharField(required=False, allow_blank=True, max_length=512)
    session_id = serializers.CharField(required=False, allow_blank=True, max_length=64)


class AttendanceFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for attendance filtering.

    Query Parameters:
        student (UUID): Filter by student ID
        session_id (str): Filter by session
        since (datetime): Attended at or after
        until (datetime): Attended before
        include_voided (bool): Also list voided records
    """

    student = serializers.UUIDField(required=False)
    session_id = serializers.CharField(required=False, max_length=64)
    since = serializers.DateTimeField(required=False)
    until = serializers.DateTimeField(required=False)
    include_voided = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        since = attrs.get('since')
        until = attrs.get('until')
        if since and until and until <= since:
            raise serializers.ValidationError({'until': 'Must be after since'})
        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class AttendanceRecordSerializer(serializers.ModelSerializer):
    """Serializer for attendance records."""

    student_name = serializers.CharField(source='student.full_name', read_only=True)

    class Meta:
        model = AttendanceRecord
        fields = [
            'id',
            'student',
            'student_name',
            'attended_at',
            'session_id',
            'belt_at_checkin',
            'degree_at_checkin',
            'source',
            'is_valid',
            'recorded_by',
            'created_at',
        ]
        read_only_fields = fields


class CheckInResultSerializer(serializers.Serializer):
    """Serializer for the outcome of a check-in attempt."""

    decision = serializers.CharField(source='decision.outcome')
    code = serializers.CharField(source='decision.code')
    payment_status = serializers.CharField(source='decision.payment_status', allow_null=True)
    message = serializers.CharField()
    attendance = AttendanceRecordSerializer(allow_null=True)
