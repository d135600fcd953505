"""
Queue store for the clinic waiting room.

All state changes of the waiting queue go through QueueStore. Every mutation
runs in one database transaction that first locks the QueueLock row, so
mutations are serialized and a position renumbering is either applied
completely or not at all.

Architecture Rules:
- Among waiting patients queue_position is always 1..N (no gaps, no duplicates)
- A NULL status is read as "waiting" everywhere (waiting_q / Patient.is_waiting)
- complete/restore/remove/reorder tolerate unknown ids as no-ops; update raises
- Mutations take the QueueLock row before any other read (no row-level locks)
- Database failures surface as StorageError, the engine never retries
- Views translate exceptions to appropriate DRF responses
"""

from __future__ import annotations

import copy
import functools
import logging
from typing import Iterable

from django.db import DatabaseError, transaction
from django.db.models import F, Q
from django.utils import timezone

from clinicqueue.waitlist.exceptions import NotFoundError, StorageError, ValidationError
from clinicqueue.waitlist.models import Patient, QueueLock, waiting_q

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Ranking helpers (pure, no DB access)
# ---------------------------------------------------------------------------

def next_position(waiting: Iterable[Patient]) -> int:
    """Tail position for a newly queued patient (max + 1, or 1 when empty)."""
    return max((p.queue_position for p in waiting), default=0) + 1


def clamp_position(new_position: int, count: int) -> int:
    return max(1, min(int(new_position), count))


def compact_positions(waiting: list[Patient]) -> list[Patient]:
    """Renumber an already sorted waiting list to 1..M.

    Returns the patients whose queue_position actually changed.
    """
    changed: list[Patient] = []
    for rank, patient in enumerate(waiting, start=1):
        if patient.queue_position != rank:
            patient.queue_position = rank
            changed.append(patient)
    return changed


def shift_positions(waiting: list[Patient], patient_id: int, new_position: int) -> list[Patient]:
    """Move one patient inside a sorted waiting list.

    The current position is the patient's rank in ``waiting``, not the stored
    value, so out-of-sync rows are healed on the way. Patients between the old
    and the new rank shift by one towards the gap; everybody else keeps their
    rank. Returns the patients whose queue_position changed.
    """
    ranks = {p.pk: rank for rank, p in enumerate(waiting, start=1)}
    old_position = ranks.get(patient_id)
    if old_position is None:
        return []

    new_position = clamp_position(new_position, len(waiting))
    if old_position == new_position:
        return []

    changed: list[Patient] = []
    for rank, patient in enumerate(waiting, start=1):
        if patient.pk == patient_id:
            target = new_position
        elif old_position < new_position and old_position < rank <= new_position:
            target = rank - 1
        elif old_position > new_position and new_position <= rank < old_position:
            target = rank + 1
        else:
            target = rank

        if patient.queue_position != target:
            patient.queue_position = target
            changed.append(patient)
    return changed


def _clean_text(value, field: str) -> str:
    text = value.strip() if isinstance(value, str) else ''
    if not text:
        raise ValidationError(f'{field} is required', field=field)
    return text


def _storage_guard(operation: str, atomic: bool = True):
    """Run a store method in one transaction and map DB failures to StorageError.

    Atomic (mutating) methods hold the queue lock for the whole transaction.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                if not atomic:
                    return func(self, *args, **kwargs)
                with transaction.atomic(using=self.using):
                    self._lock_queue()
                    return func(self, *args, **kwargs)
            except DatabaseError as exc:
                logger.exception('queue: %s failed, transaction rolled back', operation)
                raise StorageError(operation) from exc
        return wrapper

    return decorator


# ---------------------------------------------------------------------------
# Queue store
# ---------------------------------------------------------------------------

class QueueStore:
    """Ordered waiting queue with a dense 1..N ranking of waiting patients."""

    def __init__(self, using: str = 'default'):
        self.using = using

    # -- DB access ----------------------------------------------------------

    def _patients(self):
        return Patient.objects.using(self.using)

    def _lock_queue(self) -> None:
        QueueLock.objects.using(self.using).select_for_update().get_or_create(pk=QueueLock.SINGLETON_ID)

    def _get(self, patient_id: int) -> Patient | None:
        return self._patients().filter(pk=patient_id).first()

    def _waiting(self) -> list[Patient]:
        return list(
            self._patients()
            .filter(waiting_q())
            .order_by('queue_position', 'id')
        )

    def _save_positions(self, changed: list[Patient]) -> int:
        if changed:
            self._patients().bulk_update(changed, ['queue_position'])
        return len(changed)

    def _compact(self) -> int:
        return self._save_positions(compact_positions(self._waiting()))

    # -- Reads --------------------------------------------------------------

    @_storage_guard('list', atomic=False)
    def list(self) -> list[Patient]:
        """Waiting patients in queue order, annotated with their rank.

        Each returned patient carries ``actual_position`` (1-based rank in this
        view) and ``patients_ahead`` (actual_position - 1).
        """
        patients = list(self._patients().filter(waiting_q()).order_by('queue_position', 'id'))
        for rank, patient in enumerate(patients, start=1):
            patient.actual_position = rank
            patient.patients_ahead = rank - 1
        return patients

    @_storage_guard('list_completed', atomic=False)
    def list_completed(self) -> list[Patient]:
        """Completed patients, most recently completed first."""
        return list(
            self._patients()
            .filter(status=Patient.STATUS_COMPLETED)
            .order_by(F('completed_at').desc(nulls_last=True), '-id')
        )

    # -- Mutations ----------------------------------------------------------

    @_storage_guard('add')
    def add(self, name: str, examination: str) -> None:
        name = _clean_text(name, 'name')
        examination = _clean_text(examination, 'examination')

        position = next_position(self._waiting())
        patient = self._patients().create(
            name=name,
            examination=examination,
            status=Patient.STATUS_WAITING,
            queue_position=position,
            created_at=timezone.now(),
        )
        logger.info('queue: patient %s added at position %s', patient.pk, position)

    @_storage_guard('update')
    def update(self, patient_id: int, name: str, examination: str) -> None:
        name = _clean_text(name, 'name')
        examination = _clean_text(examination, 'examination')

        patient = self._get(patient_id)
        if patient is None:
            raise NotFoundError(patient_id)

        patient.name = name
        patient.examination = examination
        patient.save(using=self.using, update_fields=['name', 'examination'])
        logger.info('queue: patient %s updated', patient_id)

    @_storage_guard('mark_completed')
    def mark_completed(self, patient_id: int) -> Patient | None:
        """Finish a waiting patient and close the gap behind them.

        Returns the patient as it was before completion, or None when the id is
        unknown or the patient is already completed.
        """
        patient = self._get(patient_id)
        if patient is None or patient.is_completed:
            return None

        before = copy.copy(patient)
        patient.status = Patient.STATUS_COMPLETED
        patient.completed_at = timezone.now()
        patient.save(using=self.using, update_fields=['status', 'completed_at'])

        renumbered = self._compact()
        logger.info(
            'queue: patient %s completed (was position %s, %s renumbered)',
            patient_id, before.queue_position, renumbered,
        )
        return before

    @_storage_guard('restore_patient')
    def restore_patient(self, patient_id: int) -> Patient | None:
        """Put a completed patient back at the end of the queue.

        Returns the patient as it was before restoring, or None when the id is
        unknown or the patient is not completed.
        """
        patient = self._get(patient_id)
        if patient is None or not patient.is_completed:
            return None

        before = copy.copy(patient)
        patient.status = Patient.STATUS_WAITING
        patient.queue_position = next_position(self._waiting())
        patient.completed_at = None
        patient.save(using=self.using, update_fields=['status', 'queue_position', 'completed_at'])
        logger.info('queue: patient %s restored at position %s', patient_id, patient.queue_position)
        return before

    @_storage_guard('remove')
    def remove(self, patient_id: int) -> None:
        patient = self._get(patient_id)
        if patient is None:
            return

        was_waiting = patient.is_waiting
        patient.delete(using=self.using)

        renumbered = self._compact() if was_waiting else 0
        logger.info('queue: patient %s removed (%s renumbered)', patient_id, renumbered)

    @_storage_guard('reorder')
    def reorder(self, patient_id: int, new_position: int) -> None:
        patient = self._get(patient_id)
        if patient is None or not patient.is_waiting:
            return

        changed = shift_positions(self._waiting(), patient.pk, new_position)
        if changed:
            self._save_positions(changed)
            logger.info('queue: patient %s reordered (requested position %s)', patient_id, new_position)

    @_storage_guard('clear_all')
    def clear_all(self) -> None:
        deleted, _ = self._patients().all().delete()
        logger.info('queue: cleared, %s patients deleted', deleted)

    @_storage_guard('clear_completed')
    def clear_completed(self) -> None:
        deleted, _ = self._patients().filter(status=Patient.STATUS_COMPLETED).delete()
        logger.info('queue: %s completed patients deleted', deleted)

    # -- Maintenance --------------------------------------------------------

    @_storage_guard('normalize')
    def normalize(self) -> dict[str, int]:
        """Backfill legacy NULL status and renumber the waiting set to 1..N."""
        backfilled = (
            self._patients()
            .filter(Q(status__isnull=True) | Q(status=''))
            .update(status=Patient.STATUS_WAITING)
        )
        renumbered = self._compact()
        if backfilled or renumbered:
            logger.warning(
                'queue: normalized (%s status backfilled, %s renumbered)',
                backfilled, renumbered,
            )
        return {'backfilled': backfilled, 'renumbered': renumbered}
