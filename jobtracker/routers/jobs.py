import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from jobtracker.core.exceptions import JobNotFoundError
from jobtracker.database import get_db
from jobtracker.models.job import Job
from jobtracker.schemas.job import JobCreate, JobUpdate, JobResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
)

def _get_live_job(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(
        Job.id == job_id,
        Job.deleted_at.is_(None)
    ).first()
    if not job:
        raise JobNotFoundError(job_id)
    return job

@router.get("", response_model=List[JobResponse])
def get_jobs(db: Session = Depends(get_db)):
    """
    List every job that has not been deleted.
    """
    return db.query(Job).filter(Job.deleted_at.is_(None)).order_by(Job.id).all()

@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(job_in: JobCreate, db: Session = Depends(get_db)):
    """
    Create a new job application record. The id is assigned here.
    """
    db_job = Job(**job_in.model_dump(mode="json"))
    db.add(db_job)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_job)

    logger.info(f"Created job {db_job.id}", extra={"job_id": db_job.id})
    return db_job

@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Get job details.
    """
    return _get_live_job(db, job_id)

@router.put("/{job_id}", response_model=JobResponse)
def update_job(job_id: int, job_in: JobUpdate, db: Session = Depends(get_db)):
    """
    Replace every editable field of a job with the payload.
    """
    job = _get_live_job(db, job_id)

    for field, value in job_in.model_dump(mode="json").items():
        setattr(job, field, value)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(job)

    logger.info(f"Updated job {job.id}", extra={"job_id": job.id})
    return job

@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Soft delete: the row stays in the table but disappears from the API.
    """
    job = _get_live_job(db, job_id)
    job.deleted_at = datetime.now(timezone.utc)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Deleted job {job_id}", extra={"job_id": job_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
