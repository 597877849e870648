"""Authentication and user provisioning forms."""
from django import forms
from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password

from tenants.models import Tenant
from .models import TenantMembership

tw = "w-full px-4 py-2 bg-gray-700 border border-gray-600 rounded-lg text-white placeholder-gray-400 focus:outline-none focus:ring-2 focus:ring-blue-500 focus:border-transparent"


class LoginForm(forms.Form):
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={"class": tw, "placeholder": "Email address", "autofocus": True})
    )
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={"class": tw, "placeholder": "Password"})
    )

    def __init__(self, request=None, *args, **kwargs):
        self.request = request
        self.user_cache = None
        super().__init__(*args, **kwargs)

    def clean(self):
        email = self.cleaned_data.get("email", "").lower()
        password = self.cleaned_data.get("password")
        if email and password:
            self.user_cache = authenticate(self.request, username=email, password=password)
            if self.user_cache is None:
                raise forms.ValidationError("Invalid email or password.")
            if not self.user_cache.is_active:
                raise forms.ValidationError("This account has been disabled.")
        return self.cleaned_data

    def get_user(self):
        return self.user_cache


class PasswordResetRequestForm(forms.Form):
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={"class": tw, "placeholder": "Email address"})
    )


class PasswordResetConfirmForm(forms.Form):
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={"class": tw, "placeholder": "New password"}),
        validators=[validate_password],
    )
    password_confirm = forms.CharField(
        widget=forms.PasswordInput(attrs={"class": tw, "placeholder": "Confirm new password"})
    )

    def clean(self):
        cd = super().clean()
        if cd.get("password") != cd.get("password_confirm"):
            raise forms.ValidationError("Passwords do not match.")
        return cd


class UserProvisionForm(forms.Form):
    """Agency form: create (or find) a user and assign a tenant role."""

    email = forms.EmailField(required=False, widget=forms.EmailInput(attrs={"class": tw, "placeholder": "Email"}))
    phone = forms.CharField(required=False, max_length=32,
                            widget=forms.TextInput(attrs={"class": tw, "placeholder": "+91 98765 43210"}))
    tenant = forms.ModelChoiceField(queryset=Tenant.objects.order_by("name"),
                                    widget=forms.Select(attrs={"class": tw}))
    role = forms.ChoiceField(choices=TenantMembership.Role.choices, widget=forms.Select(attrs={"class": tw}))
    password = forms.CharField(required=False,
                               widget=forms.PasswordInput(attrs={"class": tw, "placeholder": "Initial password"}))
    send_invite = forms.BooleanField(required=False, label="Send an invitation email instead of setting a password")

    def clean(self):
        cd = super().clean()
        email = cd.get("email")
        phone = cd.get("phone")
        if not email and not phone:
            raise forms.ValidationError("Enter an email address or a phone number.")
        if email and not cd.get("send_invite") and not cd.get("password"):
            raise forms.ValidationError("Either set a password or send an invitation.")
        if cd.get("send_invite") and not email:
            raise forms.ValidationError("Invitations need an email address.")
        if cd.get("password"):
            validate_password(cd["password"])
        return cd
