from rest_framework import serializers

from apps.students.models import Belt


# =============================================================================
# Input Serializers
# =============================================================================

class AlertFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the alerts dashboard.

    Query Parameters:
        belt (str): Only students holding this belt
    """

    belt = serializers.ChoiceField(choices=Belt.choices, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class ProgressResultSerializer(serializers.Serializer):
    """Serializer for a progression evaluation."""

    student_id = serializers.UUIDField()
    current_belt = serializers.CharField()
    current_degree = serializers.IntegerField()
    attended_since_belt = serializers.IntegerField()
    required_for_next_degree = serializers.IntegerField()
    months_required = serializers.IntegerField()
    months_at_belt = serializers.IntegerField()
    ready_for_degree = serializers.BooleanField()
    ready_for_belt_promotion = serializers.BooleanField()
    alert = serializers.BooleanField()
    next_degree_if_awarded = serializers.IntegerField()
    next_belt_if_promoted = serializers.CharField(allow_null=True)
    progress_percent = serializers.IntegerField()


class CardStudentSerializer(serializers.Serializer):
    """Public subset of a student shown on the card status page."""

    id = serializers.UUIDField()
    full_name = serializers.CharField()
    current_belt = serializers.CharField()
    current_degree = serializers.IntegerField()


class CardStatusSerializer(serializers.Serializer):
    """Serializer for the public card status."""

    student = CardStudentSerializer()
    progress = ProgressResultSerializer()
    payment_status = serializers.CharField(source='standing.status')
    due_date = serializers.DateField(source='standing.due_date', allow_null=True)
    month_start = serializers.DateField()
    month_end = serializers.DateField(source='standing.month_end')
    classes_this_month = serializers.IntegerField()
