from django.urls import path
from . import views

app_name = 'progression'

urlpatterns = [
    # GET /api/progression/students/{id}/  - Student progress
    path('students/<uuid:student_id>/', views.student_progress, name='student-progress'),
    # GET /api/progression/alerts/         - Dashboard alerts
    path('alerts/', views.progress_alerts, name='alerts'),
    # GET /api/progression/card/?t=  - Public card status
    path('card/', views.card_status, name='card-status'),
]
