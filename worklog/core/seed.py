"""Starter data written when the work log collection is empty."""

from .store import DataStore
from .validation import validate_work_log_input
from . import worklog_service
from ..util.logging import logger

INITIAL_LOG = {
    "title": "Initial Setup",
    "description": "Setting up the work log application with file storage and image uploads.",
    "impact": "Created a centralized place to track work progress.",
    "impactLevel": "medium",
    "component": "Platform",
    "hoursSpent": 4,
    "issues": "Deciding on storage strategy for serverless environments.",
    "iterations": 1,
    "failures": "None so far.",
    "metrics": "Time to deploy: < 10 mins",
    "images": [],
}


def seed_if_empty(store: DataStore) -> bool:
    """Create the starter entry (and its component) if no logs exist. Returns True if seeded."""
    if store.worklogs.count() > 0:
        return False

    payload = validate_work_log_input(INITIAL_LOG).unwrap()
    worklog_service.create_work_log(store, payload)
    logger.info("Seeded empty work log store with starter entry")
    return True
