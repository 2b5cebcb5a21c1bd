"""
Canonical record shapes for the two persisted collections, plus the
load-time normalization that coerces whatever is on disk back into them.
"""

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

IMPACT_LEVELS = ("low", "medium", "high", "very_high")
DEFAULT_IMPACT_LEVEL = "medium"

# Placeholders for stored records that lost their required text
UNTITLED = "Untitled"
NO_DESCRIPTION = "No description"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class WorkLog:
    id: str
    date: str
    title: str
    description: str
    impact: str = ""
    impact_level: str = DEFAULT_IMPACT_LEVEL
    component: str = ""
    hours_spent: float = 0
    issues: str = ""
    iterations: int = 0
    failures: str = ""
    metrics: str = ""
    images: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape, as stored on disk and served over HTTP."""
        return {
            "id": self.id,
            "date": self.date,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "impactLevel": self.impact_level,
            "component": self.component,
            "hoursSpent": self.hours_spent,
            "issues": self.issues,
            "iterations": self.iterations,
            "failures": self.failures,
            "metrics": self.metrics,
            "images": list(self.images),
        }


@dataclass
class Component:
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


def new_id() -> str:
    return str(uuid.uuid4())


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date or timestamp; naive values are taken as UTC. None if unparseable."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def date_sort_key(log: WorkLog) -> datetime:
    return parse_iso_datetime(log.date) or _EPOCH


def _text(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _required_text(value: Any, placeholder: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return placeholder


def _non_negative_number(value: Any) -> float:
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0
    if isinstance(value, (int, float)) and math.isfinite(value) and value >= 0:
        return value
    return 0


def _non_negative_int(value: Any) -> int:
    number = _non_negative_number(value)
    if float(number).is_integer():
        return int(number)
    return 0


def normalize_work_log(raw: Dict[str, Any]) -> WorkLog:
    """Coerce one stored record to the canonical shape, filling defaults for missing/invalid fields."""
    record_id = raw.get("id")
    date = raw.get("date")
    impact_level = raw.get("impactLevel")
    images = raw.get("images")

    return WorkLog(
        id=record_id if isinstance(record_id, str) and record_id else new_id(),
        date=date if parse_iso_datetime(date) is not None else now_iso(),
        title=_required_text(raw.get("title"), UNTITLED),
        description=_required_text(raw.get("description"), NO_DESCRIPTION),
        impact=_text(raw.get("impact")),
        impact_level=impact_level if impact_level in IMPACT_LEVELS else DEFAULT_IMPACT_LEVEL,
        component=_text(raw.get("component")),
        hours_spent=_non_negative_number(raw.get("hoursSpent")),
        issues=_text(raw.get("issues")),
        iterations=_non_negative_int(raw.get("iterations")),
        failures=_text(raw.get("failures")),
        metrics=_text(raw.get("metrics")),
        images=[image for image in images if isinstance(image, str)] if isinstance(images, list) else [],
    )


def normalize_work_logs(raw_records: List[Any]) -> Tuple[List[WorkLog], int]:
    """Normalize a loaded collection. Returns the records and how many entries were dropped."""
    logs = []
    seen_ids = set()
    dropped = 0
    for raw in raw_records:
        if not isinstance(raw, dict):
            dropped += 1
            continue
        log = normalize_work_log(raw)
        if log.id in seen_ids:
            log.id = new_id()
        seen_ids.add(log.id)
        logs.append(log)
    return logs, dropped


def normalize_components(raw_records: List[Any]) -> Tuple[List[Component], int]:
    """Normalize loaded components; nameless entries and case-insensitive duplicates are dropped."""
    components = []
    seen_ids = set()
    seen_names = set()
    dropped = 0
    for raw in raw_records:
        name = raw.get("name") if isinstance(raw, dict) else None
        if not isinstance(name, str) or not name.strip() or name.strip().lower() in seen_names:
            dropped += 1
            continue
        record_id = raw.get("id")
        if not isinstance(record_id, str) or not record_id or record_id in seen_ids:
            record_id = new_id()
        seen_ids.add(record_id)
        seen_names.add(name.strip().lower())
        components.append(Component(id=record_id, name=name))
    return components, dropped
