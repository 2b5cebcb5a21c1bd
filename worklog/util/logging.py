"""
Structured operation logging for the work log store and API.
Every store mutation, load-time repair, validation rejection and upload goes through here.
"""

import logging
from typing import Any, Dict, List

class StructuredLogger:
    """Structured logger for work log, component and upload operations."""

    def __init__(self, name: str = "worklog"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.info(message)

    def log_worklog_operation(self, operation: str, log_id: str, title: str = None, status: str = "success"):
        """Log a work log mutation."""
        details = {"id": log_id}
        if title is not None:
            details["title"] = title[:50] + "..." if len(title) > 50 else title

        self.log_operation(f"worklog.{operation}", status, details)

    def log_component_operation(self, operation: str, component_id: str, name: str, status: str = "success"):
        """Log a component upsert."""
        self.log_operation(f"component.{operation}", status, {"id": component_id, "name": name})

    def log_store_repair(self, path: str, record_count: int, dropped: int = 0):
        """Log a collection file rewritten after load-time normalization."""
        log_details = {
            "path": path,
            "record_count": record_count,
            "dropped": dropped
        }
        self.log_operation("store.repaired", "rewritten", log_details)

    def log_schema_validation_error(self, operation: str, errors: List[Any], target_identifier: str = None):
        """Log schema validation errors with sanitized details."""
        # Field values may hold free text typed by the user
        sanitized_errors = []
        for error in errors:
            if isinstance(error, dict):
                sanitized_error = error.copy()
                for field in ['input', 'value']:
                    if field in sanitized_error:
                        sanitized_error[field] = "[REDACTED]"
                sanitized_errors.append(sanitized_error)
            else:
                sanitized_errors.append(str(error)[:100])

        log_details = {
            "operation": operation,
            "errors": sanitized_errors,
            "error_count": len(sanitized_errors)
        }
        if target_identifier:
            log_details["target_identifier"] = target_identifier

        self.log_operation("schema_validation.error", "rejected", log_details)

    def log_upload(self, filename: str, url: str, size: int, status: str = "success"):
        """Log a stored upload."""
        self.log_operation("upload.stored", status, {"filename": filename, "url": url, "size": size})

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()
