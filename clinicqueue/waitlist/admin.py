"""
Waitlist App - Admin für die Warteschlange
"""

from django.contrib import admin
from django.db import transaction
from django.utils.html import format_html

from clinicqueue.core.admin import queue_admin_site
from clinicqueue.waitlist.models import Patient
from clinicqueue.waitlist.store import QueueStore


@admin.register(Patient, site=queue_admin_site)
class PatientAdmin(admin.ModelAdmin):
    """Admin für Wartende & erledigte Patienten.

    Status und Position sind hier nur lesbar: Änderungen daran laufen über den
    QueueStore, damit die Positionen lückenlos bleiben.
    """

    list_display = (
        "id",
        "position_badge",
        "name",
        "examination",
        "status_badge",
        "created_at",
        "completed_at",
    )
    list_filter = ("status", "created_at")
    search_fields = ("name", "examination")
    ordering = ("status", "queue_position", "id")
    list_per_page = 50

    fields = ("name", "examination", "status", "queue_position", "created_at", "completed_at")
    readonly_fields = ("status", "queue_position", "created_at", "completed_at")

    def has_add_permission(self, request):
        return False

    def delete_model(self, request, obj):
        QueueStore().remove(obj.pk)

    def delete_queryset(self, request, queryset):
        store = QueueStore()
        with transaction.atomic(using=store.using):
            for pk in list(queryset.values_list("pk", flat=True)):
                store.remove(pk)

    def position_badge(self, obj):
        """Position als Badge (nur für Wartende)"""
        if not obj.is_waiting:
            return "–"
        return format_html(
            '<span style="font-family: monospace; background-color: #1A73E8; '
            'color: white; padding: 2px 8px; border-radius: 4px;">#{}</span>',
            obj.queue_position
        )
    position_badge.short_description = "Position"

    def status_badge(self, obj):
        color = "#34A853" if obj.is_completed else "#FBBC05"
        return format_html(
            '<span style="background-color: {}; color: white; padding: 2px 8px; border-radius: 4px;">{}</span>',
            color, obj.effective_status
        )
    status_badge.short_description = "Status"
