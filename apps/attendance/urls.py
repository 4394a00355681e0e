from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'attendance'

# Router for ViewSets
router = DefaultRouter()
router.register(r'records', views.AttendanceRecordViewSet, basename='record')

urlpatterns = [
    # Check-in
    path('checkin/', views.checkin, name='checkin'),

    # Attendance ViewSet routes
    # GET  /api/attendance/records/            - List attendance
    # GET  /api/attendance/records/{id}/       - Get record
    # POST /api/attendance/records/{id}/void/  - Void record

    # Include router URLs
    path('', include(router.urls)),
]
