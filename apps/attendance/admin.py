from django.contrib import admin
from .models import AttendanceRecord


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    """Admin interface for attendance records."""

    list_display = [
        'student',
        'attended_at',
        'session_id',
        'belt_at_checkin',
        'degree_at_checkin',
        'source',
        'is_valid',
    ]
    list_filter = ['is_valid', 'source', 'belt_at_checkin', 'attended_at']
    search_fields = ['student__full_name', 'session_id']
    readonly_fields = ['created_at']
    date_hierarchy = 'attended_at'
    raw_id_fields = ['student', 'recorded_by']
