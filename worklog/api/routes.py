"""
REST endpoints for work logs, components and image uploads, mounted under /api.
"""

from dataclasses import asdict
from fastapi import APIRouter, Body, Depends, File, Request, Response, UploadFile
from typing import Any, Dict, List, Optional

from .schemas import (
    WorkLogResponse,
    ComponentResponse,
    UploadResponse,
    ErrorResponse,
    ValidationErrorResponse,
)
from ..core import worklog_service
from ..core.errors import NotFoundError, UploadError
from ..core.store import DataStore
from ..core.uploads import UploadStorage
from ..core.validation import (
    ValidationResult,
    validate_component_input,
    validate_work_log_input,
    validate_work_log_update,
)
from ..util.logging import logger

router = APIRouter(prefix="/api")


def get_store(request: Request) -> DataStore:
    return request.app.state.store


def get_uploads(request: Request) -> UploadStorage:
    return request.app.state.uploads


def _require_valid(result: ValidationResult, operation: str, target: str = None) -> Dict[str, Any]:
    if not result.ok:
        logger.log_schema_validation_error(operation, [asdict(result.error)], target)
    return result.unwrap()


@router.get("/logs", response_model=List[WorkLogResponse])
def list_logs(store: DataStore = Depends(get_store)):
    """All work logs, newest first."""
    return [log.to_dict() for log in worklog_service.list_work_logs(store)]


@router.get("/logs/{log_id}", response_model=WorkLogResponse, responses={404: {"model": ErrorResponse}})
def get_log(log_id: str, store: DataStore = Depends(get_store)):
    log = worklog_service.get_work_log(store, log_id)
    if log is None:
        raise NotFoundError("Work log", log_id)
    return log.to_dict()


@router.post(
    "/logs",
    status_code=201,
    response_model=WorkLogResponse,
    responses={400: {"model": ValidationErrorResponse}},
)
def create_log(body: Dict[str, Any] = Body(...), store: DataStore = Depends(get_store)):
    """Create a work log; a new component name on it is registered as a component too."""
    payload = _require_valid(validate_work_log_input(body), "worklog.create")
    return worklog_service.create_work_log(store, payload).to_dict()


@router.put(
    "/logs/{log_id}",
    response_model=WorkLogResponse,
    responses={400: {"model": ValidationErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_log(log_id: str, body: Dict[str, Any] = Body(...), store: DataStore = Depends(get_store)):
    """Partially update a work log. Fields left out of the body keep their values."""
    changes = _require_valid(validate_work_log_update(body), "worklog.update", log_id)
    return worklog_service.update_work_log(store, log_id, changes).to_dict()


@router.delete("/logs/{log_id}", status_code=204, responses={404: {"model": ErrorResponse}})
def delete_log(log_id: str, store: DataStore = Depends(get_store)):
    # Idempotent: an unknown id still answers 204
    worklog_service.delete_work_log(store, log_id)
    return Response(status_code=204)


@router.get("/components", response_model=List[ComponentResponse])
def list_components(store: DataStore = Depends(get_store)):
    return [component.to_dict() for component in worklog_service.list_components(store)]


@router.post(
    "/components",
    status_code=201,
    response_model=ComponentResponse,
    responses={400: {"model": ValidationErrorResponse}},
)
def create_component(body: Dict[str, Any] = Body(...), store: DataStore = Depends(get_store)):
    """Create a component, or return the existing one with the same name (any case)."""
    payload = _require_valid(validate_component_input(body), "component.create")
    return worklog_service.create_component(store, payload["name"]).to_dict()


@router.post("/upload", response_model=UploadResponse, responses={400: {"model": ErrorResponse}})
def upload_file(file: Optional[UploadFile] = File(None), uploads: UploadStorage = Depends(get_uploads)):
    """Store a single uploaded file and return the URL to embed in a log's images."""
    if file is None:
        raise UploadError("No file uploaded")
    return UploadResponse(url=uploads.save(file.filename, file.file))
