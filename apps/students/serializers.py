from rest_framework import serializers
from .models import Student, BeltHistory, Belt, MAX_DEGREE


# =============================================================================
# Input Serializers
# =============================================================================

class StudentFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for student filtering.

    Query Parameters:
        active (bool): Filter by active flag
        belt (str): Filter by current belt
        search (str): Search in name and email
    """

    active = serializers.BooleanField(required=False, allow_null=True, default=None)
    belt = serializers.ChoiceField(choices=Belt.choices, required=False)
    search = serializers.CharField(required=False, max_length=200)


class PromoteInputSerializer(serializers.Serializer):
    """Validate input for applying a promotion."""

    notes = serializers.CharField(required=False, allow_blank=True, max_length=1000)


# =============================================================================
# Output Serializers
# =============================================================================

class StudentSerializer(serializers.ModelSerializer):
    """Serializer for student records."""

    current_belt_display = serializers.CharField(source='get_current_belt_display', read_only=True)

    class Meta:
        model = Student
        fields = [
            'id',
            'full_name',
            'email',
            'phone',
            'active',
            'current_belt',
            'current_belt_display',
            'current_degree',
            'belt_since',
            'total_classes',
            'belt_lessons',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'total_classes',
            'belt_lessons',
            'created_at',
            'updated_at',
        ]

    def validate_current_degree(self, value):
        if not 0 <= value <= MAX_DEGREE:
            raise serializers.ValidationError(f"Degree must be between 0 and {MAX_DEGREE}")
        return value

    def validate(self, attrs):
        """Rank changes go through the promote action once a student exists."""
        if self.instance is not None:
            for field in ('current_belt', 'current_degree', 'belt_since'):
                if field in attrs and attrs[field] != getattr(self.instance, field):
                    raise serializers.ValidationError({
                        field: 'Use the promote action to change rank'
                    })
        return attrs


class StudentListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for student lists."""

    class Meta:
        model = Student
        fields = [
            'id',
            'full_name',
            'active',
            'current_belt',
            'current_degree',
            'total_classes',
        ]


class BeltHistorySerializer(serializers.ModelSerializer):
    """Serializer for award history entries."""

    awarded_by_username = serializers.CharField(
        source='awarded_by.username',
        read_only=True,
        allow_null=True,
        default=None,
    )

    class Meta:
        model = BeltHistory
        fields = [
            'id',
            'student',
            'belt',
            'degree',
            'awarded_at',
            'awarded_by',
            'awarded_by_username',
            'notes',
        ]
        read_only_fields = fields


class RankSerializer(serializers.Serializer):
    belt = serializers.CharField(source='current_belt')
    degree = serializers.IntegerField(source='current_degree')
    belt_since = serializers.DateTimeField()


class PromotionResultSerializer(serializers.Serializer):
    """Serializer for an applied promotion."""

    student = RankSerializer()
    history = BeltHistorySerializer()


class CardTokenSerializer(serializers.Serializer):
    """Serializer for the signed token printed on a student's card."""

    student_id = serializers.UUIDField()
    token = serializers.CharField()
