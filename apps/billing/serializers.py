from rest_framework import serializers
from .models import Payment, PaymentMethod, PaymentStatus, PaymentStanding


# =============================================================================
# Input Serializers
# =============================================================================

class PaymentFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for payment filtering.

    Query Parameters:
        student (UUID): Filter by student ID
        status (str): Filter by paid/unpaid
        month (str): Filter by period month (YYYY-MM)
    """

    student = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    month = serializers.RegexField(r'^\d{4}-(0[1-9]|1[0-2])$', required=False)


class MarkPaidInputSerializer(serializers.Serializer):
    """Validate input for marking a payment as paid."""

    paid_at = serializers.DateTimeField(required=False)
    method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False)


class StandingFilterSerializer(serializers.Serializer):
    """Validate query parameters for the standings overview."""

    status = serializers.ChoiceField(choices=PaymentStanding.choices, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class PaymentSerializer(serializers.ModelSerializer):
    """Serializer for payments."""

    class Meta:
        model = Payment
        fields = [
            'id',
            'student',
            'amount',
            'start_date',
            'end_date',
            'status',
            'paid_at',
            'method',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'paid_at',
            'created_at',
            'updated_at',
        ]

    def validate(self, attrs):
        """Validate billing period."""
        start_date = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end_date = attrs.get('end_date', getattr(self.instance, 'end_date', None))

        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({
                'end_date': 'End date must be after start date'
            })

        return attrs


class MonthStandingSerializer(serializers.Serializer):
    """Serializer for a student's monthly standing."""

    student_id = serializers.UUIDField()
    month_start = serializers.DateField()
    month_end = serializers.DateField()
    status = serializers.CharField()
    due_date = serializers.DateField(allow_null=True)
    payment = PaymentSerializer(allow_null=True)
