from django.db import models
from django.db.models import Q
from django.utils import timezone


def waiting_q() -> Q:
	"""Filter for the waiting partition.

	Rows written by older clients have no status at all; they count as waiting.
	"""
	return Q(status__isnull=True) | Q(status="") | Q(status=Patient.STATUS_WAITING)


class Patient(models.Model):
	"""A patient in the single clinic waiting queue.

	queue_position is only meaningful while the patient is waiting. Among the
	waiting rows the positions are always 1..N; for completed rows the value is
	frozen at completion time and must not be used for ordering.
	"""

	STATUS_WAITING = "waiting"
	STATUS_COMPLETED = "completed"

	STATUS_CHOICES = (
		(STATUS_WAITING, STATUS_WAITING),
		(STATUS_COMPLETED, STATUS_COMPLETED),
	)

	name = models.CharField(max_length=200)
	examination = models.CharField(max_length=200)
	# NULL = legacy waiting (see waiting_q / effective_status)
	status = models.CharField(
		max_length=16,
		choices=STATUS_CHOICES,
		default=STATUS_WAITING,
		null=True,
		blank=True,
	)
	queue_position = models.PositiveIntegerField()
	created_at = models.DateTimeField(default=timezone.now, editable=False)
	completed_at = models.DateTimeField(null=True, blank=True)

	class Meta:
		db_table = "waitlist_patient"
		ordering = ["queue_position", "id"]
		verbose_name = "Patient (Warteschlange)"
		verbose_name_plural = "Patients (Warteschlange)"
		indexes = [
			models.Index(fields=["status", "queue_position"], name="waitlist_pa_status_9d1e4c_idx"),
		]

	def __str__(self) -> str:
		return f"{self.name} ({self.examination}) #{self.queue_position} [{self.effective_status}]"

	@property
	def effective_status(self) -> str:
		if self.status == self.STATUS_COMPLETED:
			return self.STATUS_COMPLETED
		return self.STATUS_WAITING

	@property
	def is_waiting(self) -> bool:
		return self.effective_status == self.STATUS_WAITING

	@property
	def is_completed(self) -> bool:
		return self.status == self.STATUS_COMPLETED


class QueueLock(models.Model):
	"""Single row that every queue mutation locks before it reads anything.

	Patient row locks do not block concurrent INSERTs; the tail position of
	add/restore is only stable while this row is held.
	"""

	SINGLETON_ID = 1

	id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_ID, editable=False)

	class Meta:
		db_table = "waitlist_queuelock"

	def __str__(self) -> str:
		return "queue lock"
