from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'billing'

# Router for ViewSets
router = DefaultRouter()
router.register(r'payments', views.PaymentViewSet, basename='payment')

urlpatterns = [
    # Payment ViewSet routes
    # GET    /api/billing/payments/                 - List payments
    # POST   /api/billing/payments/                 - Create payment
    # GET    /api/billing/payments/{id}/            - Get payment
    # PUT    /api/billing/payments/{id}/            - Update payment
    # DELETE /api/billing/payments/{id}/            - Delete payment
    # POST   /api/billing/payments/{id}/mark_paid/  - Reconcile payment

    # Standing endpoints
    path('standings/', views.month_standings, name='standings'),
    path('students/<uuid:student_id>/standing/', views.student_standing, name='student-standing'),

    # Include router URLs
    path('', include(router.urls)),
]
