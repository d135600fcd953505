"""Tests for queue maintenance: normalize_queue command/task and seed_roles."""

from __future__ import annotations

from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from clinicqueue.core.models import Role
from clinicqueue.waitlist.models import Patient
from clinicqueue.waitlist.tasks import normalize_queue


class NormalizeQueueTest(TestCase):
    databases = {"default"}

    def setUp(self):
        # Out-of-sync positions plus one legacy row without status
        Patient.objects.create(name="Alice", examination="xray", status="waiting", queue_position=3)
        Patient.objects.create(name="Legacy", examination="ct", status=None, queue_position=7)
        Patient.objects.create(name="Done", examination="mri", status="completed", queue_position=1)

    def _waiting(self):
        return list(
            Patient.objects.filter(status="waiting")
            .order_by("queue_position")
            .values_list("name", "queue_position")
        )

    def test_command_repairs_queue(self):
        out = StringIO()
        call_command("normalize_queue", stdout=out)

        self.assertIn("Status backfilled: 1", out.getvalue())
        self.assertIn("positions renumbered: 2", out.getvalue())
        self.assertEqual(self._waiting(), [("Alice", 1), ("Legacy", 2)])
        self.assertEqual(Patient.objects.get(name="Done").queue_position, 1)

    def test_command_dry_run_writes_nothing(self):
        out = StringIO()
        call_command("normalize_queue", "--dry-run", stdout=out)

        self.assertIn("[dry-run]", out.getvalue())
        self.assertIsNone(Patient.objects.get(name="Legacy").status)
        self.assertEqual(Patient.objects.get(name="Alice").queue_position, 3)

    def test_task_returns_stats(self):
        result = normalize_queue.delay()

        self.assertEqual(result.get(), {"backfilled": 1, "renumbered": 2})
        self.assertEqual(self._waiting(), [("Alice", 1), ("Legacy", 2)])


class SeedRolesTest(TestCase):
    databases = {"default"}

    def test_seed_roles_is_idempotent(self):
        out = StringIO()
        call_command("seed_roles", stdout=out)
        call_command("seed_roles", stdout=out)

        self.assertEqual(
            set(Role.objects.values_list("name", flat=True)),
            {"admin", "assistant", "doctor", "billing"},
        )
        self.assertIn("4 created", out.getvalue())
        self.assertIn("0 created", out.getvalue())
