import logging

from .models import AuditLog
from .permissions import role_name

logger = logging.getLogger(__name__)


def log_queue_action(user, action, patient_id=None, meta=None):
    """Schreibt eine Warteschlangen- oder Login-Aktion in die AuditLog-Tabelle.

    Ein fehlgeschlagener Audit-Eintrag bricht die eigentliche Aktion nicht ab.
    """
    authenticated = user is not None and user.is_authenticated
    try:
        AuditLog.objects.create(
            user=user if authenticated else None,
            role_name=role_name(user) or '',
            action=action,
            patient_id=patient_id,
            meta=meta,
        )
    except Exception:
        logger.exception('AuditLog write failed (action=%s, patient_id=%s)', action, patient_id)
