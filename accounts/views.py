"""Authentication views: login, logout, password reset and invitations."""
from django.conf import settings
from django.contrib import messages
from django.contrib.auth import login, logout
from django.shortcuts import redirect, render, get_object_or_404
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods

from django_ratelimit.decorators import ratelimit

from auditlog.services import log_event
from .forms import LoginForm, PasswordResetRequestForm, PasswordResetConfirmForm
from .models import User, PasswordResetToken
from .services import send_reset_email

LOGIN_ERRORS = {
    "no_membership": "Your account has no access to any organization. Contact your agency.",
}


def _landing_url(request):
    """The admin on the admin host, the microsite on a property host."""
    return settings.LOGIN_REDIRECT_URL if request.is_admin_host else "/"


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------
@ratelimit(key="ip", rate="10/m", method="POST", block=True)
@require_http_methods(["GET", "POST"])
def login_view(request):
    next_url = request.POST.get("next") or request.GET.get("next") or ""
    if request.method == "POST":
        form = LoginForm(request, data=request.POST)
        if form.is_valid():
            user = form.get_user()
            login(request, user)
            log_event(request, "login_success", user=user, detail=f"via {request.hostname}")
            if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                return redirect(next_url)
            return redirect(_landing_url(request))
        email = request.POST.get("email", "")
        log_event(request, "login_failure", detail=f"Failed login for {email} via {request.hostname}")
    else:
        form = LoginForm()
    return render(request, "registration/login.html", {
        "form": form,
        "next": next_url,
        "error_message": LOGIN_ERRORS.get(request.GET.get("error", "")),
    })


@require_http_methods(["GET", "POST"])
def logout_view(request):
    if request.method == "POST":
        if request.user.is_authenticated:
            log_event(request, "logout")
        logout(request)
        if request.is_admin_host:
            return redirect("accounts:login")
        return redirect("/")
    return render(request, "registration/logout_confirm.html")


# ---------------------------------------------------------------------------
# Password Reset
# ---------------------------------------------------------------------------
@ratelimit(key="ip", rate="5/m", method="POST", block=True)
@require_http_methods(["GET", "POST"])
def password_reset_request_view(request):
    if request.method == "POST":
        form = PasswordResetRequestForm(request.POST)
        if form.is_valid():
            email = form.cleaned_data["email"].lower()
            user = User.objects.filter(email__iexact=email, is_active=True).first()
            # Do not reveal whether the email exists
            if user is not None:
                token_obj = PasswordResetToken.objects.create(user=user)
                send_reset_email(user, token_obj.token)
                log_event(request, "password_reset_requested", user=user)
            messages.success(request, "If an account exists with that email, a reset link has been sent.")
            return redirect("accounts:login")
    else:
        form = PasswordResetRequestForm()
    return render(request, "registration/password_reset_request.html", {"form": form})


@require_http_methods(["GET", "POST"])
def password_reset_confirm_view(request, token):
    token_obj = get_object_or_404(PasswordResetToken, token=token)
    if not token_obj.is_valid:
        messages.error(request, "This link has expired or already been used.")
        return redirect("accounts:login")

    is_invite = token_obj.purpose == PasswordResetToken.Purpose.INVITE
    if request.method == "POST":
        form = PasswordResetConfirmForm(request.POST)
        if form.is_valid():
            user = token_obj.user
            user.set_password(form.cleaned_data["password"])
            user.save(update_fields=["password"])
            token_obj.used = True
            token_obj.save(update_fields=["used"])
            log_event(request, "invitation_accepted" if is_invite else "password_reset_complete", user=user)
            messages.success(request, "Password has been set. Please log in.")
            return redirect("accounts:login")
    else:
        form = PasswordResetConfirmForm()

    return render(request, "registration/password_reset_confirm.html", {
        "form": form,
        "token": token,
        "is_invite": is_invite,
    })
