"""
Operations the API exposes, composed from the two stores.

Creating or updating a work log with a component name that is not yet known
also registers that component. That cross-collection write lives here, so
each store only ever touches its own file.
"""

from typing import Any, Dict, List, Optional

from .schema import Component, WorkLog
from .store import DataStore
from ..util.logging import logger


def list_work_logs(store: DataStore) -> List[WorkLog]:
    return store.worklogs.list()


def get_work_log(store: DataStore, log_id: str) -> Optional[WorkLog]:
    return store.worklogs.get(log_id)


def create_work_log(store: DataStore, payload: Dict[str, Any]) -> WorkLog:
    """Store a validated create payload, then register its component if it is new."""
    log = store.worklogs.create(payload)
    logger.log_worklog_operation("created", log.id, log.title)
    ensure_component(store, log.component)
    return log


def update_work_log(store: DataStore, log_id: str, changes: Dict[str, Any]) -> WorkLog:
    """Merge a validated partial update. Raises NotFoundError for an unknown id."""
    log = store.worklogs.update(log_id, changes)
    logger.log_worklog_operation("updated", log.id, log.title)
    ensure_component(store, log.component)
    return log


def delete_work_log(store: DataStore, log_id: str) -> None:
    """Delete a log; an unknown id is not an error."""
    removed = store.worklogs.delete(log_id)
    logger.log_worklog_operation("deleted", log_id, status="success" if removed else "absent")


def list_components(store: DataStore) -> List[Component]:
    return store.components.list()


def create_component(store: DataStore, name: str) -> Component:
    """Upsert by case-insensitive name; an existing match is returned unchanged."""
    component, created = store.components.upsert(name)
    logger.log_component_operation("created" if created else "matched", component.id, component.name)
    return component


def ensure_component(store: DataStore, name: Optional[str]) -> Optional[Component]:
    """Register a component named on a work log, if it has a name and is not known yet."""
    if not name or not name.strip():
        return None
    return create_component(store, name)
