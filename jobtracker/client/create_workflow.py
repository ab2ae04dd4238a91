import enum
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from jobtracker.client.forms import JobForm
from jobtracker.client.notifications import Notifier, failure_message
from jobtracker.client.persistence import JobsClient
from jobtracker.core.exceptions import FormValidationError, RequestError, WorkflowStateError
from jobtracker.schemas.job import Job

logger = logging.getLogger(__name__)

class CreateState(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"

TRANSITIONS = {
    CreateState.IDLE: {CreateState.SUBMITTING},
    CreateState.SUBMITTING: {CreateState.SUCCESS, CreateState.ERROR},
    CreateState.SUCCESS: {CreateState.IDLE},
    CreateState.ERROR: {CreateState.IDLE},
}

CreatedCallback = Callable[[Job], Union[None, Awaitable[None]]]

class CreateJobWorkflow:
    """
    One-shot form for new job records.

    Validation failures stay local (``errors``); request failures keep the
    entered values and raise an error notification. The state always ends
    back in IDLE; ``last_outcome`` tells how the last attempt went.
    """

    def __init__(
        self,
        client: JobsClient,
        notifier: Notifier,
        on_created: Optional[CreatedCallback] = None,
    ):
        self.client = client
        self.notifier = notifier
        self.on_created = on_created
        self.form = JobForm()
        self.state = CreateState.IDLE
        self.errors: Dict[str, str] = {}
        self.last_outcome: Optional[CreateState] = None

    @property
    def can_submit(self) -> bool:
        return self.state == CreateState.IDLE

    def set_field(self, name: str, value: Any) -> None:
        if name not in JobForm.field_names():
            raise AttributeError(f"JobForm has no field '{name}'")
        setattr(self.form, name, value)
        self.errors.pop(name, None)

    def reset(self) -> None:
        """Clear the entered values and any field messages."""
        self.form = JobForm()
        self.errors = {}

    def _transition(self, target: CreateState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise WorkflowStateError("create", self.state.value, target.value)
        logger.debug(f"create: {self.state.value} -> {target.value}")
        self.state = target

    async def submit(self) -> Optional[Job]:
        """Validate, send and settle. Returns the created job, or None."""
        if not self.can_submit:
            logger.debug("create: submit ignored while a request is in flight")
            return None

        try:
            payload = self.form.to_payload()
        except FormValidationError as e:
            self.errors = e.errors
            return None
        self.errors = {}

        self._transition(CreateState.SUBMITTING)
        try:
            job = await self.client.create_job(payload)
        except RequestError as e:
            self._transition(CreateState.ERROR)
            self.last_outcome = CreateState.ERROR
            self.notifier.error(failure_message("Failed to create job", e))
            self._transition(CreateState.IDLE)
            return None

        self._transition(CreateState.SUCCESS)
        self.last_outcome = CreateState.SUCCESS
        self.form = JobForm()
        self.notifier.success("Job created!")
        self._transition(CreateState.IDLE)
        logger.info(f"Created job {job.id}", extra={"job_id": job.id})

        if self.on_created:
            result = self.on_created(job)
            if inspect.isawaitable(result):
                await result
        return job
