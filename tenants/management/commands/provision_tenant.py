"""
Management command to provision a new tenant with its first property.

Usage:
    python manage.py provision_tenant \\
        --name "Lakeside Stays" \\
        --property-name "Lakeside Homestay" \\
        --slug lakeside-homestay \\
        --country India \\
        --domain www.lakeside-homestay.com \\
        --admin-email owner@lakeside.com \\
        --admin-password "SecureP@ss123"

This will:
1. Create the tenant record
2. Create the property (unpublished) and its primary Domain record
3. Create or reuse the admin user and give them a membership in the tenant
"""
import getpass

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from accounts.models import TenantMembership, User
from accounts.services import upsert_membership
from auditlog.services import log_event
from tenants.hostnames import normalize_hostname
from tenants.models import Domain
from tenants.services import add_domain, create_property, create_tenant


class Command(BaseCommand):
    help = "Provision a new tenant with a property, primary domain, and initial admin user."

    def add_arguments(self, parser):
        parser.add_argument("--name", required=True, help="Tenant display name")
        parser.add_argument("--property-name", required=True, help="Name of the first property")
        parser.add_argument("--slug", required=True, help="Property slug (e.g. 'lakeside-homestay')")
        parser.add_argument("--country", required=True, help="Property country")
        parser.add_argument("--domain", required=True, help="Public hostname (e.g. www.lakeside-homestay.com)")
        parser.add_argument("--admin-email", required=True, help="Initial admin user email")
        parser.add_argument("--admin-password", required=False, help="Admin password (prompted if omitted)")
        parser.add_argument(
            "--role", default=TenantMembership.Role.TENANT_ADMIN,
            choices=TenantMembership.Role.values, help="Membership role for the admin user",
        )

    def handle(self, *args, **options):
        hostname = normalize_hostname(options["domain"])
        admin_email = options["admin_email"].lower().strip()

        if not hostname:
            raise CommandError("Domain is required.")
        if Domain.objects.filter(hostname=hostname).exists():
            raise CommandError(f"Domain '{hostname}' is already routed to a property.")

        user = User.objects.find_by_contact(email=admin_email)
        admin_password = options.get("admin_password")
        if user is None and not admin_password:
            admin_password = getpass.getpass("Enter admin password: ")
            confirm = getpass.getpass("Confirm admin password: ")
            if admin_password != confirm:
                raise CommandError("Passwords do not match.")

        with transaction.atomic():
            tenant = create_tenant(options["name"])
            self.stdout.write(f"Created tenant '{tenant.name}' ({tenant.pk}).")
            try:
                prop = create_property(tenant, options["property_name"], options["slug"], options["country"])
            except ValidationError as exc:
                raise CommandError(f"Invalid property: {'; '.join(exc.messages)}")
            add_domain(prop, hostname, is_primary=True)
            self.stdout.write(self.style.SUCCESS(f"Domain {hostname} → property '{prop.name}' created."))

            if user is None:
                user = User.objects.create_user(email=admin_email, password=admin_password)
                self.stdout.write(f"Created user {admin_email}.")
            upsert_membership(user, tenant, options["role"])
            log_event(None, "tenant_provisioned", user=user, prop=prop,
                      detail=f"{hostname} via provision_tenant, {admin_email} as {options['role']}")

        self.stdout.write(self.style.SUCCESS(
            f"{admin_email} is {options['role']} of '{tenant.name}'.\n"
            f"\n"
            f"NEXT STEPS:\n"
            f"  1. DNS: point {hostname} at your server\n"
            f"  2. Fill in the property content and publish it from /admin/properties/{prop.pk}/\n"
        ))
