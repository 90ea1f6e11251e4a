from django.urls import path, include

urlpatterns = [
    path("", include("authentication.urls")),
    path("doctors/", include("doctors.urls")),
    path("api/", include("core.urls")),
    path("", include("appointments.urls")),
]
