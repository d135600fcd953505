"""
Waitlist App Configuration
"""

from django.apps import AppConfig


class WaitlistConfig(AppConfig):
	"""App-Konfiguration für die Warteschlange"""
	default_auto_field = 'django.db.models.BigAutoField'
	name = 'clinicqueue.waitlist'
	verbose_name = 'Waitlist (Warteschlange)'
