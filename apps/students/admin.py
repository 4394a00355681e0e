from django.contrib import admin
from .models import Student, BeltHistory


class BeltHistoryInline(admin.TabularInline):
    model = BeltHistory
    extra = 0
    fields = ['belt', 'degree', 'awarded_at', 'awarded_by', 'notes']
    readonly_fields = ['awarded_at']
    raw_id_fields = ['awarded_by']


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    """Admin interface for students."""

    list_display = [
        'full_name',
        'current_belt',
        'current_degree',
        'belt_since',
        'total_classes',
        'active',
    ]
    list_filter = ['active', 'current_belt', 'current_degree']
    search_fields = ['full_name', 'email', 'phone']
    readonly_fields = ['total_classes', 'belt_lessons', 'created_at', 'updated_at']
    inlines = [BeltHistoryInline]

    fieldsets = (
        ('Contact', {
            'fields': ('full_name', 'email', 'phone', 'active')
        }),
        ('Rank', {
            'fields': ('current_belt', 'current_degree', 'belt_since')
        }),
        ('Counters', {
            'fields': ('total_classes', 'belt_lessons'),
            'classes': ('collapse',)
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(BeltHistory)
class BeltHistoryAdmin(admin.ModelAdmin):
    """Admin interface for award history."""

    list_display = ['student', 'belt', 'degree', 'awarded_at', 'awarded_by']
    list_filter = ['belt', 'awarded_at']
    search_fields = ['student__full_name', 'notes']
    date_hierarchy = 'awarded_at'
    raw_id_fields = ['student', 'awarded_by']
