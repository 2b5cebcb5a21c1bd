"""
Storage, validation and service operations for work logs and components.
"""

from .schema import WorkLog, Component, IMPACT_LEVELS
from .store import DataStore, WorkLogStore, ComponentStore, JsonCollection
from .errors import WorkLogError, NotFoundError, SchemaValidationError, StorageError, UploadError

__all__ = [
    'WorkLog',
    'Component',
    'IMPACT_LEVELS',
    'DataStore',
    'WorkLogStore',
    'ComponentStore',
    'JsonCollection',
    'WorkLogError',
    'NotFoundError',
    'SchemaValidationError',
    'StorageError',
    'UploadError'
]
