"""
Load-time normalization: stored records are coerced to the canonical shape and repaired on disk.
"""

import json
import pytest

from worklog.core.errors import StorageError
from worklog.core.schema import (
    NO_DESCRIPTION,
    UNTITLED,
    normalize_components,
    normalize_work_log,
    normalize_work_logs,
    parse_iso_datetime,
)


def write_collection(path, records):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records), encoding="utf-8")


class TestNormalizeWorkLog:
    """Test coercion of individual stored records."""

    def test_missing_fields_get_defaults(self):
        log = normalize_work_log({"id": "a1", "date": "2024-01-01", "title": "T", "description": "D"})

        assert log.impact_level == "medium"
        assert log.hours_spent == 0
        assert log.iterations == 0
        assert log.images == []
        assert log.component == ""
        assert log.metrics == ""

    def test_invalid_values_are_coerced(self):
        log = normalize_work_log({
            "id": "a1",
            "date": "2024-01-01",
            "title": "T",
            "description": "D",
            "impactLevel": "extreme",
            "hoursSpent": -4,
            "iterations": 2.5,
            "images": ["/uploads/x.png", 7, None],
            "issues": 12,
        })

        assert log.impact_level == "medium"
        assert log.hours_spent == 0
        assert log.iterations == 0
        assert log.images == ["/uploads/x.png"]
        assert log.issues == ""

    def test_numeric_strings_are_accepted(self):
        log = normalize_work_log({"id": "a1", "date": "2024-01-01", "title": "T", "description": "D",
                                  "hoursSpent": "1.5", "iterations": "3"})
        assert log.hours_spent == 1.5
        assert log.iterations == 3

    def test_booleans_are_not_numbers(self):
        log = normalize_work_log({"id": "a1", "date": "2024-01-01", "title": "T", "description": "D",
                                  "hoursSpent": True, "iterations": True})
        assert log.hours_spent == 0
        assert log.iterations == 0

    def test_missing_id_and_date_are_generated(self):
        log = normalize_work_log({"title": "T", "description": "D", "date": "yesterday"})

        assert log.id
        assert parse_iso_datetime(log.date) is not None

    def test_empty_title_and_description_get_placeholders(self):
        log = normalize_work_log({"id": "a1", "date": "2024-01-01", "title": "", "description": None})
        assert log.title == UNTITLED
        assert log.description == NO_DESCRIPTION

    def test_unknown_fields_are_dropped(self):
        log = normalize_work_log({"id": "a1", "date": "2024-01-01", "title": "T", "description": "D",
                                  "jira": "ABC-1", "type": "task"})
        assert "jira" not in log.to_dict()
        assert "type" not in log.to_dict()


class TestNormalizeCollections:
    """Test whole-collection normalization."""

    def test_non_object_entries_are_dropped(self):
        logs, dropped = normalize_work_logs([{"id": "a", "title": "T", "description": "D", "date": "2024-01-01"}, "junk", 3])
        assert [log.id for log in logs] == ["a"]
        assert dropped == 2

    def test_duplicate_ids_are_reassigned(self):
        raw = {"id": "same", "title": "T", "description": "D", "date": "2024-01-01"}
        logs, _ = normalize_work_logs([raw, dict(raw)])
        assert logs[0].id == "same"
        assert logs[1].id != "same"

    def test_components_dedupe_case_insensitively(self):
        components, dropped = normalize_components([
            {"id": "c1", "name": "Platform"},
            {"id": "c2", "name": "platform"},
            {"id": "c3", "name": ""},
            {"id": "c4"},
        ])
        assert [c.id for c in components] == ["c1"]
        assert dropped == 3


class TestRepairOnLoad:
    """Test that the store writes back normalized content."""

    def test_old_record_loads_with_impact_level_default(self, store):
        write_collection(store.worklogs.path, [
            {"id": "legacy", "date": "2024-01-01T00:00:00.000Z", "title": "Old", "description": "Before impact levels",
             "impact": "", "hoursSpent": 1, "issues": "", "iterations": 0, "failures": "", "metrics": "", "images": []},
        ])

        log = store.worklogs.get("legacy")

        assert log.impact_level == "medium"
        on_disk = json.loads(store.worklogs.path.read_text(encoding="utf-8"))
        assert on_disk[0]["impactLevel"] == "medium"
        assert on_disk[0]["component"] == ""

    def test_canonical_file_is_not_rewritten(self, store):
        created = store.worklogs.create({"title": "T", "description": "D", "impact": "", "impact_level": "high",
                                         "component": "", "hours_spent": 1.0, "issues": "", "iterations": 0,
                                         "failures": "", "metrics": "", "images": []})
        text = store.worklogs.path.read_text(encoding="utf-8")
        mtime = store.worklogs.path.stat().st_mtime_ns

        store.invalidate()
        assert store.worklogs.get(created.id) == created
        assert store.worklogs.path.read_text(encoding="utf-8") == text
        assert store.worklogs.path.stat().st_mtime_ns == mtime

    def test_non_array_file_is_a_storage_error(self, store):
        write_collection(store.components.path, {"name": "Platform"})
        with pytest.raises(StorageError):
            store.components.list()
