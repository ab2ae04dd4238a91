import pytest
from datetime import date, datetime, timedelta, timezone

from jobtracker.client.forms import (
    JobForm,
    display_date,
    format_salary,
    parse_iso,
    to_date_input,
    to_iso,
)
from jobtracker.core.exceptions import FormValidationError
from jobtracker.schemas.job import JobStatus, suggest_places
from helpers import make_job


class TestDateNormalization:
    def test_iso_string_is_canonicalized(self):
        assert to_iso("2024-03-15T00:00:00.000Z") == "2024-03-15T00:00:00.000Z"
        assert to_iso("2024-03-15T00:00:00Z") == "2024-03-15T00:00:00.000Z"
        assert to_iso("2024-03-15") == "2024-03-15T00:00:00.000Z"

    def test_offsets_are_converted_to_utc(self):
        assert to_iso("2024-03-15T05:30:00+05:30") == "2024-03-15T00:00:00.000Z"
        moment = datetime(2024, 3, 15, 10, 0, tzinfo=timezone(timedelta(hours=-4)))
        assert to_iso(moment) == "2024-03-15T14:00:00.000Z"

    def test_plain_date_is_midnight_utc(self):
        assert to_iso(date(2024, 3, 15)) == "2024-03-15T00:00:00.000Z"

    def test_naive_datetime_is_taken_as_utc(self):
        assert to_iso(datetime(2024, 3, 15, 9, 15, 30, 250000)) == "2024-03-15T09:15:30.250Z"

    def test_empty_values(self):
        assert to_iso(None) is None
        assert to_iso("  ") is None

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            to_iso("next tuesday")
        with pytest.raises(ValueError):
            to_iso(42)

    def test_date_input_keeps_calendar_date(self):
        value = to_date_input("2024-03-15T00:00:00.000Z")
        assert value.date() == date(2024, 3, 15)
        assert value.tzinfo is not None
        assert to_iso(value) == "2024-03-15T00:00:00.000Z"

    def test_date_input_keeps_unparseable_text(self):
        assert to_date_input("sometime in March") == "sometime in March"
        assert to_date_input(None) is None

    def test_display_date(self):
        assert display_date("2024-03-15T00:00:00.000Z", "%d/%m/%Y") == "15/03/2024"
        assert display_date("not a date") == "not a date"
        assert display_date(None) is None

    def test_parse_iso_lowercase_z(self):
        assert parse_iso("2024-03-15T00:00:00z") == datetime(2024, 3, 15, tzinfo=timezone.utc)


class TestJobForm:
    def test_from_job_copies_fields(self):
        job = make_job(status="offer", salary=10, date_applied="2024-03-15T00:00:00.000Z", notes="n")
        form = JobForm.from_job(job)
        assert form.title == job.title
        assert form.status == JobStatus.OFFER
        assert form.salary == 10
        assert form.notes == "n"
        assert form.date_applied.date() == date(2024, 3, 15)

    def test_payload_requires_title_and_company(self):
        with pytest.raises(FormValidationError) as exc:
            JobForm(title=" ", company="").to_payload()
        assert exc.value.errors == {
            "title": "Please enter a title",
            "company": "Please enter a company",
        }

    def test_payload_reports_bad_salary_and_status(self):
        with pytest.raises(FormValidationError) as exc:
            JobForm(title="t", company="c", salary=-5, status="ghosted").to_payload()
        assert set(exc.value.errors) == {"salary", "status"}

    def test_payload_reports_bad_date(self):
        with pytest.raises(FormValidationError) as exc:
            JobForm(title="t", company="c", date_applied="soon").to_payload()
        assert "date_applied" in exc.value.errors

    def test_payload_normalizes(self):
        payload = JobForm(
            title=" Engineer ",
            company="Acme",
            status=JobStatus.APPLIED,
            notes="",
            place="Atlantis",
            date_applied=date(2024, 3, 15),
        ).to_payload()
        assert payload.title == "Engineer"
        assert payload.status == JobStatus.APPLIED
        assert payload.notes is None
        assert payload.place == "Atlantis"
        assert payload.date_applied == "2024-03-15T00:00:00.000Z"

    def test_to_payload_leaves_form_untouched(self):
        form = JobForm(title="t", company="c", date_applied=date(2024, 3, 15))
        form.to_payload()
        assert form.date_applied == date(2024, 3, 15)


def test_suggest_places_is_case_insensitive():
    assert suggest_places("ban") == ["Bangalore"]
    assert suggest_places("DEL") == ["Delhi"]
    assert len(suggest_places()) == 8
    assert suggest_places("zzz") == []


def test_status_labels():
    assert JobStatus.NOT_APPLIED.label == "Not Applied"
    assert JobStatus.OFFER.label == "Offer"


def test_format_salary():
    assert format_salary(120000.0) == "$ 120000"
    assert format_salary(99.5) == "$ 99.5"
