import logging
from dataclasses import dataclass
from typing import List, Optional

from jobtracker.client.detail_workflow import JobDetailWorkflow
from jobtracker.client.forms import display_date
from jobtracker.client.notifications import Notifier, failure_message
from jobtracker.client.persistence import JobsClient
from jobtracker.client.store import CollectionStore
from jobtracker.core.exceptions import RequestError
from jobtracker.schemas.job import Job

logger = logging.getLogger(__name__)

EMPTY_TEXT = "No jobs yet"
DELETE_PROMPT = "Are you sure you want to delete this job?"
SEPARATOR = " • "

@dataclass
class JobRow:
    id: int
    primary: str
    secondary: str

@dataclass
class ListView:
    busy: bool
    rows: List[JobRow]
    empty_text: Optional[str] = None

def render_row(job: Job) -> JobRow:
    """One list entry: 'title @ company' over status, source, date and notes."""
    date_text = display_date(job.date_applied)
    parts = [
        job.status.value if job.status else None,
        f"Source: {job.source}" if job.source else None,
        f"Applied: {date_text}" if date_text else None,
    ]
    secondary = SEPARATOR.join(part for part in parts if part)
    if job.notes:
        secondary += f" — {job.notes}"
    return JobRow(
        id=job.id,
        primary=f"{job.title or '—'} @ {job.company or '—'}",
        secondary=secondary,
    )

class JobListPresenter:
    """
    Renders the collection store and owns the delete confirmation and the
    detail workflow for the selected row.
    """

    def __init__(self, store: CollectionStore, client: JobsClient, notifier: Notifier):
        self.store = store
        self.client = client
        self.notifier = notifier
        self.detail = JobDetailWorkflow(client, notifier, on_updated=self._on_updated)
        self.pending_delete: Optional[int] = None
        self.deleting = False

    def view(self) -> ListView:
        if self.store.loading:
            return ListView(busy=True, rows=[])
        rows = [render_row(job) for job in self.store.jobs]
        return ListView(busy=False, rows=rows, empty_text=None if rows else EMPTY_TEXT)

    def select(self, job_id: int) -> Job:
        job = self.store.get(job_id)
        if job is None:
            raise KeyError(f"Job {job_id} is not in the current list")
        self.detail.open(job)
        return job

    def close_detail(self) -> None:
        self.detail.close()

    async def _on_updated(self, job: Job) -> None:
        await self.store.load()

    # --- delete --------------------------------------------------------------

    @property
    def confirm_prompt(self) -> Optional[str]:
        return DELETE_PROMPT if self.pending_delete is not None else None

    def request_delete(self, job_id: int) -> str:
        self.pending_delete = job_id
        return DELETE_PROMPT

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> bool:
        """Delete the job awaiting confirmation. The list is only reloaded on success."""
        if self.pending_delete is None or self.deleting:
            return False
        job_id = self.pending_delete
        self.pending_delete = None
        self.deleting = True
        try:
            await self.client.delete_job(job_id)
        except RequestError as e:
            logger.error(f"Delete of job {job_id} failed", extra={"status_code": e.status_code})
            self.notifier.error(failure_message("Delete failed", e))
            return False
        finally:
            self.deleting = False

        self.notifier.success("Job Deleted!")
        await self.store.load()
        return True
