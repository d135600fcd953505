"""Clinic queue URL Configuration.

API-Routen:
    /api/health/  - Health check (core)
    /api/auth/    - Authentication (core)
    /api/queue/   - Warteschlange (waitlist)
"""

from django.http import HttpResponse
from django.urls import include, path

from clinicqueue.core.admin import queue_admin_site


def root(request):
    """Root endpoint, a plain-text liveness probe."""
    return HttpResponse("Clinic queue backend is running.")


urlpatterns = [
    path("", root, name="root"),
    path("queueadmin/", queue_admin_site.urls),

    # API Routes
    path("api/", include("clinicqueue.core.urls")),
    path("api/", include("clinicqueue.waitlist.urls")),
]
