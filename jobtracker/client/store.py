import logging
from typing import List, Optional

from jobtracker.client.persistence import JobsClient
from jobtracker.core.exceptions import RequestError
from jobtracker.schemas.job import Job

logger = logging.getLogger(__name__)

class RefetchToken:
    """Monotonic counter owned by the parent; every bump asks the store to reload."""

    def __init__(self):
        self.value = 0

    def bump(self) -> int:
        self.value += 1
        return self.value

class CollectionStore:
    """
    Holds the full job collection as last reported by the service.

    A failed load degrades to an empty list; the reason is kept in
    ``last_error`` and logged. Loads are sequenced: a response that arrives
    after a newer load was dispatched is dropped.
    """

    def __init__(self, client: JobsClient):
        self.client = client
        self.jobs: List[Job] = []
        self.loading = False
        self.last_error: Optional[RequestError] = None
        self._seen_token: Optional[int] = None
        self._dispatched = 0

    async def load(self) -> List[Job]:
        self._dispatched += 1
        seq = self._dispatched
        self.loading = True
        try:
            jobs = await self.client.list_jobs()
        except RequestError as e:
            if seq != self._dispatched:
                logger.debug("Dropping stale job list failure", extra={"seq": seq})
                return self.jobs
            logger.warning(
                f"Loading jobs failed: {e.message}",
                extra={"status_code": e.status_code, "error_code": e.error_code},
            )
            self.jobs = []
            self.last_error = e
            return self.jobs
        finally:
            if seq == self._dispatched:
                self.loading = False

        if seq != self._dispatched:
            logger.debug("Dropping stale job list", extra={"seq": seq, "latest": self._dispatched})
            return self.jobs
        self.jobs = jobs
        self.last_error = None
        return self.jobs

    async def sync(self, token: int) -> bool:
        """Load on first call (mount) and whenever the token has changed."""
        if self._seen_token is not None and token == self._seen_token:
            return False
        self._seen_token = token
        await self.load()
        return True

    def get(self, job_id: int) -> Optional[Job]:
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None
