"""
Core App Configuration
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """App-Konfiguration für Benutzer, Rollen & Audit"""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'clinicqueue.core'
    verbose_name = 'Core (Benutzer & Rollen)'
