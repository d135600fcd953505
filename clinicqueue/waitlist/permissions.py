from clinicqueue.core.permissions import RBACPermission


class QueuePermission(RBACPermission):
    """RBAC for the waiting queue endpoints.

    - admin, assistant, doctor: read + write
    - billing: read-only
    """

    read_roles = frozenset({"admin", "assistant", "doctor", "billing"})
    write_roles = frozenset({"admin", "assistant", "doctor"})


class QueueClearPermission(RBACPermission):
    """Bulk deletes (clear all / clear completed): reception staff only."""

    read_roles = frozenset({"admin", "assistant"})
    write_roles = frozenset({"admin", "assistant"})


def queue_capabilities(user) -> dict[str, bool]:
    """What the user may do with the queue, so the frontend can hide buttons."""
    grants = QueuePermission.grants(user)
    return {
        "view": grants["read"],
        "edit": grants["write"],
        "clear": QueueClearPermission.grants(user)["write"],
    }
