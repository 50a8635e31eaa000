"""
Activity log: one immutable row per successful mutation.
"""

from django.db import transaction

from storageman.models.activity import ActivityLog


def append_activity(storage, user, action, message, timestamp=None) -> ActivityLog:
    """
    Persist one activity row.

    Must run inside the mutating operation's atomic block so the row
    commits or rolls back together with the mutation.

    Raises:
        RuntimeError: Called outside a transaction
    """
    if not transaction.get_connection().in_atomic_block:
        raise RuntimeError("Activity must be appended inside the mutating transaction.")

    fields = {
        'storage': storage,
        'user': user,
        'action': action,
        'message': message,
    }
    if timestamp is not None:
        fields['timestamp'] = timestamp
    return ActivityLog.objects.create(**fields)
