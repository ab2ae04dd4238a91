"""
Form state shared by the create and detail/edit workflows.

Dates travel as ISO-8601 strings in UTC (``2024-03-15T00:00:00.000Z``). Inside a
form the date is held as a timezone-aware UTC datetime so that the calendar
date shown to the user never shifts with the local timezone.
"""
import logging
from dataclasses import dataclass, fields, replace
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError

from jobtracker.core.config import settings
from jobtracker.core.exceptions import FormValidationError
from jobtracker.schemas.job import Job, JobCreate, JobStatus

logger = logging.getLogger(__name__)

REQUIRED_MESSAGES = {
    "title": "Please enter a title",
    "company": "Please enter a company",
}

def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 string into an aware UTC datetime. Naive input is taken as UTC."""
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)

def to_iso(value: Any) -> Optional[str]:
    """
    Normalize a date field to the canonical wire form.

    Accepts a datetime, a date (midnight UTC) or an ISO-8601 string.
    Raises ValueError for anything else.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, datetime):
        moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min, tzinfo=timezone.utc)
    elif isinstance(value, str):
        moment = parse_iso(value)
    else:
        raise ValueError(f"unsupported date value {value!r}")
    moment = moment.astimezone(timezone.utc)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}Z"

def to_date_input(value: Optional[str]) -> Any:
    """
    Translate a stored date string into what the date input holds.
    Unparseable strings are kept as-is so the user can see and fix them.
    """
    if not value:
        return None
    try:
        return parse_iso(value)
    except ValueError:
        logger.warning("Stored date_applied is not ISO-8601", extra={"date_applied": value})
        return value

def display_date(value: Optional[str], fmt: Optional[str] = None) -> Optional[str]:
    """Localized calendar date for display; falls back to the raw string."""
    if not value:
        return None
    try:
        return parse_iso(value).strftime(fmt or settings.client.date_format)
    except ValueError:
        return value

@dataclass
class JobForm:
    title: str = ""
    company: str = ""
    status: Optional[Any] = None
    notes: Optional[str] = None
    source: Optional[str] = None
    place: Optional[str] = None
    salary: Optional[float] = None
    date_applied: Any = None

    @classmethod
    def from_job(cls, job: Job) -> "JobForm":
        return cls(
            title=job.title,
            company=job.company,
            status=job.status,
            notes=job.notes,
            source=job.source,
            place=job.place,
            salary=job.salary,
            date_applied=to_date_input(job.date_applied),
        )

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]

    def copy(self) -> "JobForm":
        return replace(self)

    def values(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.field_names()}

    def to_payload(self) -> JobCreate:
        """
        Validate the form and build the request payload.

        Raises FormValidationError with one message per offending field; the
        form itself is never modified.
        """
        errors: Dict[str, str] = {}
        for name, message in REQUIRED_MESSAGES.items():
            value = getattr(self, name)
            if value is None or not str(value).strip():
                errors[name] = message

        date_applied = None
        try:
            date_applied = to_iso(self.date_applied)
        except ValueError:
            errors["date_applied"] = "Please enter a valid date"

        if errors:
            raise FormValidationError(errors)

        status = self.status.value if isinstance(self.status, JobStatus) else self.status
        try:
            return JobCreate(
                title=self.title,
                company=self.company,
                status=status or None,
                notes=self.notes,
                source=self.source,
                place=self.place,
                salary=self.salary,
                date_applied=date_applied,
            )
        except ValidationError as e:
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "form"
                errors.setdefault(field, error["msg"])
            raise FormValidationError(errors)

def format_salary(value: float) -> str:
    amount = int(value) if float(value).is_integer() else value
    return f"$ {amount}"
