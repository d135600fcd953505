from __future__ import annotations

from unittest.mock import patch

from django.db import DatabaseError
from django.test import RequestFactory, TestCase

from clinicqueue.core.admin import queue_admin_site
from clinicqueue.core.models import User
from clinicqueue.waitlist.exceptions import StorageError
from clinicqueue.waitlist.models import Patient
from clinicqueue.waitlist.store import QueueStore


class PatientAdminTest(TestCase):
    """Deletes from the admin go through the store and keep positions dense."""

    databases = {"default"}

    def setUp(self):
        self.model_admin = queue_admin_site._registry[Patient]
        self.superuser = User.objects.db_manager("default").create_superuser(
            username="admin_site_test",
            email="admin_site_test@example.com",
            password="DummyPass123!",
        )
        self.request = RequestFactory().get("/queueadmin/")
        self.request.user = self.superuser

        store = QueueStore()
        for name in ("Alice", "Bob", "Carol"):
            store.add(name, "xray")

    def test_add_is_disabled(self):
        self.assertFalse(self.model_admin.has_add_permission(self.request))

    def test_delete_model_compacts_queue(self):
        self.model_admin.delete_model(self.request, Patient.objects.get(name="Alice"))

        self.assertEqual(
            list(Patient.objects.order_by("queue_position").values_list("name", "queue_position")),
            [("Bob", 1), ("Carol", 2)],
        )

    def test_delete_queryset_compacts_queue(self):
        self.model_admin.delete_queryset(self.request, Patient.objects.filter(name__in=["Alice", "Bob"]))

        self.assertEqual(
            list(Patient.objects.values_list("name", "queue_position")),
            [("Carol", 1)],
        )

    def test_completed_patient_has_no_position_badge(self):
        patient = Patient.objects.get(name="Bob")
        QueueStore().mark_completed(patient.pk)
        patient.refresh_from_db()

        self.assertEqual(self.model_admin.position_badge(patient), "–")
        self.assertIn("completed", self.model_admin.status_badge(patient))

    def test_delete_queryset_is_all_or_nothing(self):
        compact = QueueStore._compact
        calls = []

        def fail_on_second(store):
            calls.append(store)
            if len(calls) == 2:
                raise DatabaseError("connection lost")
            return compact(store)

        with patch.object(QueueStore, "_compact", autospec=True, side_effect=fail_on_second):
            with self.assertRaises(StorageError):
                self.model_admin.delete_queryset(self.request, Patient.objects.all())

        self.assertEqual(
            list(Patient.objects.order_by("queue_position").values_list("name", "queue_position")),
            [("Alice", 1), ("Bob", 2), ("Carol", 3)],
        )
