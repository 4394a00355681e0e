from django.contrib import admin
from django.utils import timezone

from .models import Payment, PaymentStatus


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """Admin interface for student payments."""

    list_display = [
        'student',
        'start_date',
        'end_date',
        'amount',
        'status',
        'paid_at',
    ]
    list_filter = ['status', 'method', 'start_date']
    search_fields = ['student__full_name', 'student__email']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'start_date'
    actions = ['mark_as_paid']

    @admin.action(description='Mark selected payments as paid')
    def mark_as_paid(self, request, queryset):
        """Reconcile all selected unpaid payments."""
        updated = queryset.filter(status=PaymentStatus.UNPAID).update(
            status=PaymentStatus.PAID,
            paid_at=timezone.now(),
        )
        self.message_user(request, f'{updated} payment(s) marked as paid.')
