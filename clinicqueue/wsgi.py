"""
WSGI config for the clinic queue backend.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'clinicqueue.settings')

application = get_wsgi_application()
