from django.urls import path
from appointments import views

urlpatterns = [
    path('', views.dashboard, name='dashboard'),

    # Appointment actions
    path('appointments/<str:appointment_id>/status/', views.update_appointment_status, name='update_appointment_status'),
]
