"""Django app configuration for Storageman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class StoragemanConfig(AppConfig):
    """Configuration for Storageman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "storageman"
    verbose_name = _("Storage Management")
