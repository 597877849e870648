"""Audit trail of admin actions, scoped to a tenant and optionally a property."""
import uuid
from django.conf import settings
from django.db import models


class AuditEntry(models.Model):
    """One recorded admin action. Rows are append-only."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="audit_entries",
    )
    tenant = models.ForeignKey(
        "tenants.Tenant", on_delete=models.SET_NULL, null=True, blank=True,
        related_name="audit_entries",
    )
    property = models.ForeignKey(
        "tenants.Property", on_delete=models.SET_NULL, null=True, blank=True,
        related_name="audit_entries",
    )
    event_type = models.CharField(max_length=50, db_index=True)
    detail = models.TextField(blank=True, default="")
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True, default="")

    class Meta:
        app_label = "auditlog"
        db_table = "audit_log"
        ordering = ["-timestamp"]
        verbose_name_plural = "audit entries"
        indexes = [
            models.Index(fields=["event_type", "timestamp"], name="idx_audit_type_ts"),
            models.Index(fields=["tenant", "timestamp"], name="idx_audit_tenant_ts"),
            models.Index(fields=["property", "timestamp"], name="idx_audit_property_ts"),
        ]

    def __str__(self):
        who = self.user.display_name if self.user else "system"
        return f"{self.event_type} by {who} at {self.timestamp:%Y-%m-%d %H:%M}"
