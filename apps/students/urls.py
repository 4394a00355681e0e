from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'students'

# Router for ViewSets
router = SimpleRouter()
router.register(r'', views.StudentViewSet, basename='student')

urlpatterns = [
    # Student ViewSet routes
    # GET    /api/students/                 - List students
    # POST   /api/students/                 - Enroll student
    # GET    /api/students/{id}/            - Get student
    # PATCH  /api/students/{id}/            - Update student
    # DELETE /api/students/{id}/            - Delete student
    # POST   /api/students/{id}/promote/    - Apply promotion
    # GET    /api/students/{id}/history/    - Award history
    # GET    /api/students/{id}/card/       - Card token

    # Include router URLs
    path('', include(router.urls)),
]
