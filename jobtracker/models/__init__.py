# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import job

# Explicit class exports for cleaner imports
from .job import Job

__all__ = [
    "Job",
]
