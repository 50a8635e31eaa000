"""
Enums for Storageman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class BoxState(models.TextChoices):
    """
    Derived box state. Only ``checked_out_at`` is persisted.

    OPEN:    nothing checked out yet
    PARTIAL: some boxes checked out, some remain
    CLOSED:  every box checked out (checked_out_at is set)
    """
    OPEN = 'open', _('Open')
    PARTIAL = 'partial', _('Partial')
    CLOSED = 'closed', _('Closed')


class ActivityAction(models.TextChoices):
    """Kinds of activity log entries."""
    CREATE = 'CREATE', _('Create')
    UPDATE = 'UPDATE', _('Update')
    DELETE = 'DELETE', _('Delete')
    RESIZE = 'RESIZE', _('Resize')
    ADD_BOX = 'ADD_BOX', _('Add box')
    UPDATE_BOX = 'UPDATE_BOX', _('Update box')
    DELETE_BOX = 'DELETE_BOX', _('Delete box')
    CHECKOUT_BOX = 'CHECKOUT_BOX', _('Checkout box')
