"""Role checks shared by the admin views, the JSON routes and the public editor."""
import logging

from .models import TenantMembership

logger = logging.getLogger(__name__)

Role = TenantMembership.Role

EDIT_ROLES = (Role.AGENCY_ADMIN, Role.AGENCY_RM, Role.TENANT_ADMIN, Role.TENANT_EDITOR)
DELETE_ROLES = (Role.AGENCY_ADMIN, Role.AGENCY_RM, Role.TENANT_ADMIN)


def get_memberships(user):
    if not user or not user.is_authenticated:
        return TenantMembership.objects.none()
    return TenantMembership.objects.filter(user=user).select_related("tenant").order_by("tenant_id")


def get_membership(user, tenant=None):
    """The membership that governs ``user``'s access.

    With ``tenant``, the user's membership in that tenant, falling back to an
    agency-admin membership since agency admins act on every tenant. Without
    it, the agency-admin membership if the user has one, else the first.
    """
    memberships = get_memberships(user)
    if tenant is not None:
        tenant_id = getattr(tenant, "pk", tenant)
        own = memberships.filter(tenant_id=tenant_id).first()
        if own is not None:
            return own
        return memberships.filter(role=Role.AGENCY_ADMIN).first()
    admin = memberships.filter(role=Role.AGENCY_ADMIN).first()
    if admin is not None:
        return admin
    return memberships.first()


def _membership_for_property(user, prop):
    if prop is None:
        return None
    return get_membership(user, prop.tenant_id)


def can_edit_property(user, prop):
    membership = _membership_for_property(user, prop)
    return membership is not None and membership.role in EDIT_ROLES


def can_delete_property(user, prop):
    membership = _membership_for_property(user, prop)
    return membership is not None and membership.role in DELETE_ROLES


def can_create_property(user, tenant=None):
    membership = get_membership(user, tenant)
    return membership is not None and membership.role != Role.TENANT_EDITOR
