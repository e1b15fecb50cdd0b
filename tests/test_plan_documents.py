"""Tests for plan document validation and the file-backed plan store."""

from __future__ import annotations

import datetime
import json

import pytest

from backplan.schemas import PlanDocument, PlanFormatError, PlanTask
from backplan.services.plan_store import PlanNotFoundError, PlanStore
from backplan.utils import build_plan_filename, slugify_filename

PLAN_JSON = json.dumps(
    {
        "deadline": "2025-06-20",
        "tasks": [
            {"name": "Design", "duration": 3, "startDate": "2025-06-18", "endDate": "2025-06-20"},
            {"name": "Review", "duration": "2"},
        ],
        "dateFormat": "MM/dd/yyyy",
        "excludeHolidays": True,
    }
)


class TestPlanDocument:
    """Tests for PlanDocument parsing and serialization."""

    def test_from_json_camel_case(self):
        document = PlanDocument.from_json(PLAN_JSON)

        assert document.deadline == datetime.date(2025, 6, 20)
        assert document.date_format == "MM/dd/yyyy"
        assert document.exclude_holidays is True
        assert document.tasks[0].start_date == datetime.date(2025, 6, 18)
        assert document.tasks[1].duration == 2
        assert document.tasks[1].end_date is None

    def test_datetime_values_truncated_to_calendar_day(self):
        document = PlanDocument.from_data(
            {
                "deadline": "2025-06-20T23:30:00+02:00",
                "tasks": [{"name": "Design", "duration": 1, "endDate": "2025-06-20T08:00:00Z"}],
            }
        )

        assert document.deadline == datetime.date(2025, 6, 20)
        assert document.tasks[0].end_date == datetime.date(2025, 6, 20)

    def test_defaults_for_missing_fields(self):
        document = PlanDocument.from_data({})

        assert document.deadline is None
        assert document.tasks == []
        assert document.date_format == "yyyy-MM-dd"
        assert document.exclude_holidays is False

    def test_snake_case_names_accepted(self):
        document = PlanDocument(
            deadline=datetime.date(2025, 6, 20),
            tasks=[PlanTask(name="Design", duration=3)],
            exclude_holidays=True,
        )

        assert document.exclude_holidays is True

    @pytest.mark.parametrize(
        "task",
        [
            {"name": "Design", "duration": 0},
            {"name": "Design", "duration": 2.5},
            {"name": "   ", "duration": 1},
            {"duration": 1},
        ],
    )
    def test_invalid_tasks_rejected(self, task):
        with pytest.raises(PlanFormatError):
            PlanDocument.from_data({"deadline": "2025-06-20", "tasks": [task]})

    def test_bad_deadline_rejected(self):
        with pytest.raises(PlanFormatError):
            PlanDocument.from_data({"deadline": "someday"})

    def test_malformed_json_rejected(self):
        with pytest.raises(PlanFormatError):
            PlanDocument.from_json("{not json")

    def test_to_data_uses_wire_names(self):
        data = PlanDocument.from_json(PLAN_JSON).to_data()

        assert data["deadline"] == "2025-06-20"
        assert data["dateFormat"] == "MM/dd/yyyy"
        assert data["excludeHolidays"] is True
        assert data["tasks"][0] == {
            "name": "Design",
            "duration": 3,
            "startDate": "2025-06-18",
            "endDate": "2025-06-20",
        }


class TestFilenames:
    """Tests for plan filename helpers."""

    def test_slugify_plan_name(self):
        assert slugify_filename("Q3 Launch Plan") == "q3-launch-plan"
        assert slugify_filename("release.json") == "release"

    def test_slugify_handles_empty(self):
        assert slugify_filename(None) == ""
        assert slugify_filename("!!!") == ""

    def test_build_plan_filename(self):
        assert build_plan_filename("Q3 Launch") == "q3-launch.json"
        with pytest.raises(ValueError):
            build_plan_filename("")


class TestPlanStore:
    """Tests for PlanStore."""

    def test_save_and_load(self, tmp_path):
        store = PlanStore(tmp_path / "plans")
        document = PlanDocument.from_json(PLAN_JSON)

        path = store.save("Q3 Launch", document)

        assert path == tmp_path / "plans" / "q3-launch.json"
        assert store.load("Q3 Launch") == document
        assert store.list_plans() == ["q3-launch"]

    def test_load_missing(self, tmp_path):
        with pytest.raises(PlanNotFoundError):
            PlanStore(tmp_path).load("nothing")

    def test_load_corrupt_file(self, tmp_path):
        store = PlanStore(tmp_path)
        store.path_for("broken").write_text("{oops", encoding="utf-8")

        with pytest.raises(PlanFormatError):
            store.load("broken")

    def test_load_invalid_document(self, tmp_path):
        store = PlanStore(tmp_path)
        store.path_for("bad").write_text(
            json.dumps({"tasks": [{"name": "x", "duration": -1}]}), encoding="utf-8"
        )

        with pytest.raises(PlanFormatError):
            store.load("bad")

    def test_delete(self, tmp_path):
        store = PlanStore(tmp_path)
        store.save("draft", PlanDocument())

        assert store.delete("draft") is True
        assert store.delete("draft") is False
        assert store.list_plans() == []

    def test_list_plans_without_directory(self, tmp_path):
        assert PlanStore(tmp_path / "missing").list_plans() == []
