"""Agency area forms: tenants, properties and domains."""
from django import forms

from accounts.forms import tw
from tenants.hostnames import normalize_hostname
from tenants.models import Domain, Tenant


class TenantForm(forms.ModelForm):
    class Meta:
        model = Tenant
        fields = ["name", "primary_contact_name", "primary_contact_email", "primary_contact_phone"]
        widgets = {
            "name": forms.TextInput(attrs={"class": tw, "placeholder": "Organization name"}),
            "primary_contact_name": forms.TextInput(attrs={"class": tw, "placeholder": "Contact name"}),
            "primary_contact_email": forms.EmailInput(attrs={"class": tw, "placeholder": "Contact email"}),
            "primary_contact_phone": forms.TextInput(attrs={"class": tw, "placeholder": "Contact phone"}),
        }

    def clean_name(self):
        name = self.cleaned_data["name"].strip()
        if not name:
            raise forms.ValidationError("Tenant name is required.")
        return name


class DomainForm(forms.Form):
    hostname = forms.CharField(
        max_length=253,
        widget=forms.TextInput(attrs={"class": tw, "placeholder": "www.example-homestay.com"}),
    )
    is_primary = forms.BooleanField(required=False, widget=forms.CheckboxInput(attrs={"class": "rounded text-blue-500"}))

    def __init__(self, *args, instance=None, **kwargs):
        self.instance = instance
        super().__init__(*args, **kwargs)

    def clean_hostname(self):
        hostname = normalize_hostname(self.cleaned_data["hostname"])
        if not hostname:
            raise forms.ValidationError("Hostname is required.")
        clash = Domain.objects.filter(hostname=hostname)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise forms.ValidationError(f"{hostname} is already routed to a property.")
        return hostname
