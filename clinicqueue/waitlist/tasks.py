"""Celery tasks for the waiting queue."""

import logging

from celery import shared_task

from clinicqueue.waitlist.store import QueueStore

logger = logging.getLogger(__name__)


@shared_task(name='waitlist.normalize_queue')
def normalize_queue():
    """Backfill legacy status values and renumber the waiting queue to 1..N."""
    stats = QueueStore().normalize()
    logger.info('normalize_queue finished: %s', stats)
    return stats
