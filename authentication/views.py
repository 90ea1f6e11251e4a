from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from authentication.services.auth_service import LoginService, RegistrationService, logout
from core.api_client import AUTH_COOKIES, BackendClient


@require_http_methods(["GET", "POST"])
def login_view(request):
    if request.method == "GET":
        return render(request, "authentication/login.html", {"email": "", "error": None})

    service = LoginService(request.POST, BackendClient())
    ok, result = service.authenticate()

    if not ok:
        return render(
            request,
            "authentication/login.html",
            {"email": service.email, "error": result["error"]},
            status=401,
        )

    response = redirect("/")
    for name, value in result["cookies"].items():
        response.set_cookie(name, value, httponly=True, samesite="Lax")
    return response


@require_http_methods(["GET", "POST"])
def signup_view(request):
    if request.method == "GET":
        return render(request, "authentication/signup.html", {"form": {}, "error": None})

    service = RegistrationService(request.POST, BackendClient.for_request(request))
    ok, result = service.register()

    if not ok:
        return render(
            request,
            "authentication/signup.html",
            {"form": {"name": service.name, "email": service.email}, "error": result["error"]},
            status=400,
        )

    return redirect("login")


@require_http_methods(["POST"])
def logout_view(request):
    ok, result = logout(BackendClient.for_request(request))

    if not ok:
        return render(request, "core/error.html", {"error": result["error"]}, status=502)

    response = redirect("login")
    for name in AUTH_COOKIES:
        response.delete_cookie(name)
    return response
