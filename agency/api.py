"""JSON endpoint for provisioning users from the agency area."""
import json
import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import JsonResponse
from django.views.decorators.http import require_POST

from accounts.authz import Role, get_memberships
from accounts.services import OUTCOME_MESSAGES, ProvisioningError, provision_user
from auditlog.services import log_event
from tenants.models import Tenant

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("email", "tenantId", "role")
STRING_FIELDS = ("email", "phone", "password", "tenantId", "role")


@require_POST
def create_user_api(request):
    if not request.user.is_authenticated:
        return JsonResponse({"error": "Unauthorized"}, status=401)
    if not get_memberships(request.user).filter(role=Role.AGENCY_ADMIN).exists():
        return JsonResponse({"error": "Forbidden: Agency admin access required"}, status=403)

    try:
        body = json.loads(request.body or b"{}")
    except ValueError:
        return JsonResponse({"error": "Invalid JSON body"}, status=400)
    if not isinstance(body, dict):
        return JsonResponse({"error": "Invalid JSON body"}, status=400)

    if any(not body.get(field) for field in REQUIRED_FIELDS):
        return JsonResponse({"error": "Missing required fields: email, tenantId, role"}, status=400)
    if any(not isinstance(body.get(field) or "", str) for field in STRING_FIELDS):
        return JsonResponse({"error": f"Fields must be strings: {', '.join(STRING_FIELDS)}"}, status=400)

    try:
        tenant = Tenant.objects.filter(pk=body["tenantId"]).first()
    except ValidationError:
        tenant = None
    if tenant is None:
        return JsonResponse({"error": "Tenant not found"}, status=400)

    try:
        user, outcome = provision_user(
            tenant, body["role"],
            email=body["email"], phone=body.get("phone"),
            password=body.get("password"), send_invite=bool(body.get("sendInvite")),
            request=request,
        )
    except ProvisioningError as exc:
        return JsonResponse({"error": str(exc)}, status=400)
    except (DatabaseError, OSError) as exc:
        logger.exception("User provisioning failed for tenant %s", tenant.pk)
        return JsonResponse({"error": str(exc) or "Internal server error"}, status=500)
    except Exception:
        logger.exception("Unexpected error provisioning user for tenant %s", tenant.pk)
        return JsonResponse({"error": "Internal server error"}, status=500)

    log_event(request, "membership_assigned", tenant=tenant,
              detail=f"{user.display_name} as {body['role']} ({outcome}) via API")
    return JsonResponse({"success": True, "userId": str(user.pk), "message": OUTCOME_MESSAGES[outcome]})
