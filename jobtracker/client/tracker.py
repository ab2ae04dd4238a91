import logging
from typing import Optional

from jobtracker.client.create_workflow import CreateJobWorkflow
from jobtracker.client.notifications import Notifier
from jobtracker.client.persistence import JobsClient
from jobtracker.client.presenter import JobListPresenter
from jobtracker.client.store import CollectionStore, RefetchToken
from jobtracker.schemas.job import Job

logger = logging.getLogger(__name__)

class JobTracker:
    """
    Top-level wiring: the create form bumps the refetch token, the store
    reloads on every new token value, the list presenter renders the store.
    """

    def __init__(self, client: Optional[JobsClient] = None, notifier: Optional[Notifier] = None):
        self.client = client or JobsClient()
        self.notifier = notifier or Notifier()
        self.refetch_token = RefetchToken()
        self.store = CollectionStore(self.client)
        self.create = CreateJobWorkflow(self.client, self.notifier, on_created=self._on_created)
        self.presenter = JobListPresenter(self.store, self.client, self.notifier)

    async def __aenter__(self) -> "JobTracker":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    async def mount(self) -> None:
        logger.info("Mounting job tracker", extra={"api_url": self.client.base_url})
        await self.store.sync(self.refetch_token.value)

    async def _on_created(self, job: Job) -> None:
        self.refetch_token.bump()
        await self.store.sync(self.refetch_token.value)

    @property
    def detail(self):
        return self.presenter.detail
