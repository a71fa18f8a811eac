"""Tests for candidate loading and record-to-candidate mapping."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from src.core.candidates import (
    format_last_active,
    load_candidate_records,
    load_requirements,
    load_submissions,
    parse_experience,
    parse_skills,
    to_candidate,
    to_candidates,
)
from src.core.schemas import CandidateRecord

NOW = datetime(2026, 10, 19, 12, 0, 0)


def _record(**overrides: object) -> CandidateRecord:
    defaults: dict[str, object] = {
        "id": "c1",
        "full_name": "Priya Sharma",
        "email": "priya@example.com",
        "created_at": NOW,
    }
    defaults.update(overrides)
    return CandidateRecord(**defaults)  # type: ignore[arg-type]


class TestParseExperience:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("5", 5.0),
            ("5 years", 5.0),
            ("8+ yrs", 8.0),
            ("2.5", 2.5),
            ("3.5 years.", 3.5),
            ("Fresher", 0.0),
            ("", 0.0),
            (None, 0.0),
            (".", 0.0),
        ],
    )
    def test_parse(self, text: str | None, expected: float) -> None:
        assert parse_experience(text) == expected


class TestParseSkills:
    def test_split_and_trim(self) -> None:
        assert parse_skills(" React , Node.js,AWS ") == ("React", "Node.js", "AWS")

    def test_drops_empty(self) -> None:
        assert parse_skills("React,, ,Go,") == ("React", "Go")

    def test_none(self) -> None:
        assert parse_skills(None) == ()


class TestFormatLastActive:
    def test_today(self) -> None:
        assert format_last_active(NOW - timedelta(hours=23), NOW) == "Today"

    def test_one_day(self) -> None:
        assert format_last_active(NOW - timedelta(days=1, hours=2), NOW) == "1 day ago"

    def test_many_days(self) -> None:
        assert format_last_active(NOW - timedelta(days=12), NOW) == "12 days ago"

    def test_future_is_today(self) -> None:
        assert format_last_active(NOW + timedelta(days=2), NOW) == "Today"

    def test_mixed_timezone_awareness(self) -> None:
        created = (NOW - timedelta(days=3, hours=2)).astimezone(timezone.utc)
        assert format_last_active(created, NOW) == "3 days ago"

    def test_naive_created_at_with_aware_now(self) -> None:
        now = NOW.astimezone(timezone.utc)
        assert format_last_active(NOW - timedelta(hours=20), now) == "Today"


class TestToCandidate:
    def test_defaults_not_specified(self) -> None:
        c = to_candidate(_record(), NOW)
        assert c.title == "Not specified"
        assert c.location == "Not specified"
        assert c.education == "Not specified"
        assert c.current_company == "Not specified"
        assert c.ctc == "Not specified"
        assert c.availability == "Not specified"
        assert c.pedigree_level == ""
        assert c.experience == 0.0
        assert c.skills == ()
        assert c.saved is False

    def test_title_fallback_order(self) -> None:
        assert to_candidate(_record(current_role="Dev", position="QA"), NOW).title == "Dev"
        assert to_candidate(_record(position="QA"), NOW).title == "QA"
        assert to_candidate(_record(designation="Lead", current_role="Dev"), NOW).title == "Lead"

    def test_derived_fields(self) -> None:
        c = to_candidate(
            _record(
                experience="6+ years",
                skills="Python, AWS",
                notice_period="30 days",
                created_at=NOW - timedelta(days=2),
            ),
            NOW,
        )
        assert c.name == "Priya Sharma"
        assert c.experience == 6.0
        assert c.skills == ("Python", "AWS")
        assert c.notice_period == "30 days"
        assert c.availability == "30 days"
        assert c.last_active == "2 days ago"
        assert c.summary == "Candidate profile for Priya Sharma"

    def test_batch(self) -> None:
        result = to_candidates([_record(id="a"), _record(id="b")], NOW)
        assert [c.id for c in result] == ["a", "b"]

    def test_batch_utc_created_at_without_now(self) -> None:
        created = datetime.now(timezone.utc) - timedelta(hours=20)
        record = _record(created_at=created)
        assert to_candidates([record])[0].last_active == "Today"
        assert to_candidate(record).last_active == "Today"

    def test_batch_utc_created_at_day_boundary(self) -> None:
        created = datetime.now(timezone.utc) - timedelta(hours=30)
        assert to_candidates([_record(created_at=created)])[0].last_active == "1 day ago"

    def test_batch_naive_created_at_without_now(self) -> None:
        created = datetime.now() - timedelta(hours=20)
        assert to_candidates([_record(created_at=created)])[0].last_active == "Today"

    def test_batch_zulu_timestamp_from_export(self) -> None:
        created = datetime.now(timezone.utc) - timedelta(hours=20)
        record = CandidateRecord.model_validate(
            {"id": "c1", "fullName": "Priya", "createdAt": created.strftime("%Y-%m-%dT%H:%M:%SZ")},
        )
        assert to_candidates([record])[0].last_active == "Today"


class TestLoaders:
    def test_json_camel_case(self, tmp_path: Path) -> None:
        path = tmp_path / "candidates.json"
        path.write_text(json.dumps([
            {
                "id": "c1",
                "fullName": "Arjun Mehta",
                "noticePeriod": "60 days",
                "createdAt": "2026-10-18T14:00:00",
            },
        ]))
        records = load_candidate_records(path)
        assert len(records) == 1
        assert records[0].full_name == "Arjun Mehta"
        assert records[0].notice_period == "60 days"

    def test_yaml_mapping_with_key(self, tmp_path: Path) -> None:
        path = tmp_path / "candidates.yaml"
        path.write_text(dedent("""\
            candidates:
              - id: c1
                full_name: Neha Iyer
                skills: React, TypeScript
        """))
        records = load_candidate_records(path)
        assert records[0].skills == "React, TypeScript"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "candidates.yaml"
        path.write_text("")
        assert load_candidate_records(path) == []

    def test_missing_file(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_candidate_records("/nonexistent/candidates.json")

    def test_not_a_list(self, tmp_path: Path) -> None:
        path = tmp_path / "candidates.json"
        path.write_text('"just a string"')
        with pytest.raises(ValueError, match="Expected a list"):
            load_candidate_records(path)

    def test_invalid_record(self, tmp_path: Path) -> None:
        path = tmp_path / "candidates.json"
        path.write_text(json.dumps([{"id": "c1"}]))
        with pytest.raises(ValidationError):
            load_candidate_records(path)

    def test_requirements_and_submissions(self, tmp_path: Path) -> None:
        req_path = tmp_path / "requirements.json"
        req_path.write_text(json.dumps([
            {"id": "r1", "position": "QA", "criticality": "HIGH", "isArchived": True},
        ]))
        sub_path = tmp_path / "submissions.json"
        sub_path.write_text(json.dumps([{"id": "s1", "requirementId": "r1"}]))

        requirements = load_requirements(req_path)
        submissions = load_submissions(sub_path)
        assert requirements[0].is_archived is True
        assert requirements[0].toughness == "Medium"
        assert submissions[0].requirement_id == "r1"

    def test_example_data_loads(self) -> None:
        """The shipped data/ exports must be valid."""
        assert len(load_candidate_records("data/candidates.json")) == 4
        assert len(load_requirements("data/requirements.json")) == 4
        assert len(load_submissions("data/submissions.json")) == 4
