"""
Wartezimmer - Custom Admin Site & Admin-Klassen für Benutzer, Rollen, Audit
"""

from django.contrib import admin
from django.contrib.admin import AdminSite
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.utils.html import format_html
from django.utils.safestring import mark_safe

from .models import AuditLog, Role, User


class QueueAdminSite(AdminSite):
    """Admin Site für das Wartezimmer"""
    site_header = "🏥 Wartezimmer – Praxis-Warteschlange"
    site_title = "Wartezimmer Admin"
    index_title = "Systemübersicht"
    site_url = None


queue_admin_site = QueueAdminSite(name='queueadmin')


@admin.register(Role, site=queue_admin_site)
class RoleAdmin(admin.ModelAdmin):
    """Admin-Klasse für Rollen"""

    list_display = ("name", "label", "user_count")
    search_fields = ("name", "label")
    ordering = ("name",)

    def user_count(self, obj):
        return obj.users.count()
    user_count.short_description = "Benutzer"


@admin.register(User, site=queue_admin_site)
class UserAdmin(DjangoUserAdmin):
    """Admin-Klasse für Benutzer"""

    list_display = ("username", "email", "role_badge", "is_active", "last_login")
    list_filter = ("role", "is_staff", "is_active", "is_superuser")
    search_fields = ("username", "email", "first_name", "last_name")
    ordering = ("username",)

    fieldsets = (
        ("🔐 Authentifizierung", {
            "fields": ("username", "password")
        }),
        ("👤 Persönliche Daten", {
            "fields": ("first_name", "last_name", "email", "role")
        }),
        ("🛡️ Berechtigungen", {
            "fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions"),
            "classes": ("collapse",)
        }),
        ("📅 Zeitstempel", {
            "fields": ("last_login", "date_joined"),
            "classes": ("collapse",)
        }),
    )

    add_fieldsets = (
        ("✨ Neuen Benutzer anlegen", {
            "classes": ("wide",),
            "fields": ("username", "password1", "password2", "email", "role", "first_name", "last_name"),
        }),
    )

    readonly_fields = ("last_login", "date_joined")

    def role_badge(self, obj):
        """Rolle als farbiges Badge"""
        if not obj.role:
            return mark_safe('<span style="color: #9AA0A6; font-style: italic;">Keine Rolle</span>')
        role_colors = {
            "admin": "#EA4335",
            "doctor": "#1A73E8",
            "assistant": "#34A853",
            "billing": "#FBBC05",
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 2px 8px; border-radius: 4px;">{}</span>',
            role_colors.get(obj.role.name, "#5F6368"), obj.role.name
        )
    role_badge.short_description = "Rolle"


@admin.register(AuditLog, site=queue_admin_site)
class AuditLogAdmin(admin.ModelAdmin):
    """Admin für Audit-Logs (Read-Only)"""

    list_display = ("id", "timestamp", "user", "role_name", "action", "patient_id")
    list_filter = ("action", "role_name", "timestamp")
    search_fields = ("user__username", "action", "patient_id")
    ordering = ("-timestamp", "-id")
    list_per_page = 100
    date_hierarchy = "timestamp"

    readonly_fields = ("id", "user", "role_name", "action", "patient_id", "timestamp", "meta")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return request.user.is_superuser
