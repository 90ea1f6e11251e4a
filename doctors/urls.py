from django.urls import path
from doctors import views

urlpatterns = [
    path('', views.doctor_list, name='doctor_list'),
    path('add/', views.doctor_add, name='doctor_add'),
    path('<str:doctor_id>/edit/', views.doctor_edit, name='doctor_edit'),
    path('<str:doctor_id>/delete/', views.doctor_delete, name='doctor_delete'),

    # Availability
    path('<str:doctor_id>/schedule/', views.doctor_schedule, name='doctor_schedule'),
]
