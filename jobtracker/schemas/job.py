import enum
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

class JobStatus(str, enum.Enum):
    APPLIED = "applied"
    PENDING = "pending"
    INTERVIEWING = "interviewing"
    OFFER = "offer"
    REJECTED = "rejected"
    NOT_APPLIED = "not_applied"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

# Offered in the place picker; free text is accepted as well
PLACE_SUGGESTIONS = (
    "Bangalore",
    "Hyderabad",
    "Mumbai",
    "Delhi",
    "Chennai",
    "Pune",
    "Kolkata",
    "Remote",
)

def suggest_places(query: Optional[str] = None) -> List[str]:
    """Case-insensitive contains match, so 'ban' finds 'Bangalore'."""
    if not query:
        return list(PLACE_SUGGESTIONS)
    needle = query.lower()
    return [place for place in PLACE_SUGGESTIONS if needle in place.lower()]

class JobBase(BaseModel):
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    status: Optional[JobStatus] = None
    notes: Optional[str] = None
    source: Optional[str] = None
    place: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0)
    # ISO-8601 on the wire, normalized by the client before sending
    date_applied: Optional[str] = None

    @field_validator("title", "company")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("notes", "source", "place", "date_applied", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

class JobCreate(JobBase):
    pass

class JobUpdate(JobBase):
    """Full replacement payload for PUT /jobs/{id}."""
    pass

class JobResponse(BaseModel):
    """
    A record as read back from the service. Reads are lenient so that one odd
    stored row (empty title, unknown status) never breaks loading the list.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str = ""
    company: str = ""
    status: Optional[JobStatus] = None
    notes: Optional[str] = None
    source: Optional[str] = None
    place: Optional[str] = None
    salary: Optional[float] = None
    date_applied: Optional[str] = None

    @field_validator("title", "company", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def unknown_status_to_none(cls, value):
        if isinstance(value, JobStatus):
            return value
        try:
            return JobStatus(value)
        except ValueError:
            return None

# Client-side name for a record read back from the service
Job = JobResponse
