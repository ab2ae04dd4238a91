import enum
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from jobtracker.client.forms import JobForm, display_date, format_salary
from jobtracker.client.notifications import Notifier, failure_message
from jobtracker.client.persistence import JobsClient
from jobtracker.core.exceptions import FormValidationError, RequestError, WorkflowStateError
from jobtracker.schemas.job import Job

logger = logging.getLogger(__name__)

class DetailState(str, enum.Enum):
    CLOSED = "closed"
    VIEWING = "viewing"
    EDITING = "editing"

# open() is allowed from every state; it always lands in VIEWING
TRANSITIONS = {
    DetailState.CLOSED: {DetailState.VIEWING},
    DetailState.VIEWING: {DetailState.VIEWING, DetailState.EDITING, DetailState.CLOSED},
    DetailState.EDITING: {DetailState.VIEWING, DetailState.CLOSED},
}

UpdatedCallback = Callable[[Job], Union[None, Awaitable[None]]]

class JobDetailWorkflow:
    """
    View/edit workflow bound to one selected job.

    The shadow form is a copy of the selected job's fields. Edits only land
    on the server through save(); cancel() and close() throw them away.
    Editing works on the last-known client copy, which may be stale.
    """

    def __init__(
        self,
        client: JobsClient,
        notifier: Notifier,
        on_updated: Optional[UpdatedCallback] = None,
    ):
        self.client = client
        self.notifier = notifier
        self.on_updated = on_updated
        self.state = DetailState.CLOSED
        self.job: Optional[Job] = None
        self.form = JobForm()
        self.errors: Dict[str, str] = {}
        self.saving = False
        # Bumped whenever the editor is entered or closed; a save only settles its own session
        self.session = 0

    @property
    def is_open(self) -> bool:
        return self.state != DetailState.CLOSED

    @property
    def is_editing(self) -> bool:
        return self.state == DetailState.EDITING

    @property
    def can_save(self) -> bool:
        return self.is_editing and not self.saving

    def _transition(self, target: DetailState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise WorkflowStateError("detail", self.state.value, target.value)
        logger.debug(f"detail: {self.state.value} -> {target.value}")
        self.state = target

    def _reset_form(self) -> None:
        self.form = JobForm.from_job(self.job) if self.job else JobForm()
        self.errors = {}

    def open(self, job: Job) -> None:
        self._transition(DetailState.VIEWING)
        self.session += 1
        self.job = job
        self._reset_form()

    def start_edit(self) -> None:
        self._transition(DetailState.EDITING)
        self.session += 1

    def set_field(self, name: str, value: Any) -> None:
        if not self.is_editing:
            raise WorkflowStateError("detail", self.state.value, "edit field")
        if name not in JobForm.field_names():
            raise AttributeError(f"JobForm has no field '{name}'")
        setattr(self.form, name, value)
        self.errors.pop(name, None)

    def cancel(self) -> None:
        """Drop unsaved edits and go back to viewing the last-loaded values."""
        self._transition(DetailState.VIEWING)
        self._reset_form()

    def close(self) -> None:
        if self.state == DetailState.CLOSED:
            return
        self._transition(DetailState.CLOSED)
        self.session += 1
        self.job = None
        self._reset_form()

    async def save(self) -> Optional[Job]:
        """
        Send the full edited payload. Returns the updated job on success;
        on any failure the workflow stays in EDITING with the edits intact.
        """
        if not self.is_editing:
            raise WorkflowStateError("detail", self.state.value, "save")
        if self.saving:
            logger.debug("detail: save ignored while a request is in flight")
            return None

        try:
            payload = self.form.to_payload()
        except FormValidationError as e:
            self.errors = e.errors
            return None
        self.errors = {}

        job_id = self.job.id
        session = self.session
        self.saving = True
        try:
            updated = await self.client.update_job(job_id, payload)
        except RequestError as e:
            self.notifier.error(failure_message("Update failed", e))
            return None
        finally:
            self.saving = False

        # The user may have closed or reopened the editor while the request was in flight
        if self.session != session or not self.is_editing:
            logger.info(f"Job {job_id} saved after its editor was left", extra={"job_id": job_id})
        else:
            self.job = updated
            self._transition(DetailState.VIEWING)
            self._reset_form()
        self.notifier.success("Job updated")

        if self.on_updated:
            result = self.on_updated(updated)
            if inspect.isawaitable(result):
                await result
        return updated

    # --- rendering -----------------------------------------------------------

    @property
    def title_text(self) -> str:
        if not self.job:
            return "Job"
        return f"{self.job.title} @ {self.job.company}"

    def detail_lines(self) -> List[str]:
        job = self.job
        if not job:
            return []
        lines = [f"Status: {job.status.value if job.status else '—'}"]
        if job.place:
            lines.append(f"Place: {job.place}")
        # A null salary still gets a line; only an absent field is skipped
        if "salary" in job.model_fields_set:
            lines.append(f"Salary: {format_salary(job.salary) if job.salary else '—'}")
        if job.source:
            lines.append(f"Source: {job.source}")
        if job.date_applied:
            lines.append(f"Date applied: {display_date(job.date_applied)}")
        if job.notes:
            lines.append(f"Notes: {job.notes}")
        return lines
