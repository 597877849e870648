"""Access control decorators."""
import logging
from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect, render

from accounts.authz import get_membership

logger = logging.getLogger(__name__)


def access_denied(request, message="Access denied."):
    return render(request, "403.html", {"message": message}, status=403)


def membership_required(view_func):
    """Require a signed-in user with at least one tenant membership.

    The governing membership is attached as ``request.membership``.
    """
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        membership = get_membership(request.user)
        if membership is None:
            logger.warning("User %s signed in without any tenant membership", request.user.pk)
            return redirect("/admin/login/?error=no_membership")
        request.membership = membership
        return view_func(request, *args, **kwargs)
    return _wrapped


def role_required(*roles, tenant_kwarg=None):
    """Restrict a view to the given roles.

    When ``tenant_kwarg`` names a URL kwarg holding a tenant id, the role is
    taken from the user's membership in that tenant (or their agency-admin
    membership); otherwise from ``request.membership``.
    """
    def decorator(view_func):
        @membership_required
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            membership = request.membership
            if tenant_kwarg is not None:
                membership = get_membership(request.user, kwargs.get(tenant_kwarg))
            if membership is None or membership.role not in roles:
                return access_denied(request)
            request.membership = membership
            return view_func(request, *args, **kwargs)
        return _wrapped
    return decorator
