from django.db import transaction

from .models import Role


ROLE_DEFINITIONS = [
    ("admin", "Admin"),
    ("assistant", "Assistent"),
    ("doctor", "Arzt"),
    ("billing", "Abrechnung"),
]


def seed_roles() -> dict:
    """Legt die Standardrollen an (idempotent)."""
    created = 0
    with transaction.atomic():
        for name, label in ROLE_DEFINITIONS:
            _role, was_created = Role.objects.get_or_create(name=name, defaults={"label": label})
            if was_created:
                created += 1
    return {"core_roles": len(ROLE_DEFINITIONS), "core_roles_created": created}
