from sqlalchemy import Column, Integer, String, Text, Float, DateTime
from sqlalchemy.sql import func
from jobtracker.database import Base

class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    company = Column(String, nullable=False, index=True)
    status = Column(String, nullable=True) # JobStatus value; NULL means unset
    notes = Column(Text, nullable=True)
    source = Column(String, nullable=True)
    place = Column(String, nullable=True)
    salary = Column(Float, nullable=True)
    date_applied = Column(String, nullable=True) # ISO-8601 string as sent by the client
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    # Soft delete: rows with deleted_at set are invisible to the API
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)
