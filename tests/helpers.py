import asyncio

from jobtracker.schemas.job import Job

def make_job(**overrides) -> Job:
    data = {"id": 1, "title": "Backend Engineer", "company": "Acme"}
    data.update(overrides)
    return Job(**data)

class FakeJobsClient:
    """
    Scripted stand-in for JobsClient. Each list_jobs() call pops the next
    step: a list of jobs, an exception to raise, or an asyncio.Event-gated
    (event, result) pair to hold the response until the test releases it.
    """

    def __init__(self, *steps):
        self.steps = list(steps)
        self.list_calls = 0
        self.deleted = []
        self.updated = []
        self.created = []
        self.fail_with = None
        # When set, update_job waits on this event before answering
        self.update_gate = None
        self.base_url = "http://fake"

    async def list_jobs(self):
        self.list_calls += 1
        step = self.steps.pop(0) if self.steps else []
        if isinstance(step, tuple):
            event, step = step
            await event.wait()
        if isinstance(step, Exception):
            raise step
        return list(step)

    async def create_job(self, payload):
        if self.fail_with:
            raise self.fail_with
        self.created.append(payload)
        return Job(id=len(self.created), **payload.model_dump(mode="json"))

    async def update_job(self, job_id, payload):
        if self.update_gate:
            await self.update_gate.wait()
        if self.fail_with:
            raise self.fail_with
        self.updated.append((job_id, payload))
        return Job(id=job_id, **payload.model_dump(mode="json"))

    async def delete_job(self, job_id):
        if self.fail_with:
            raise self.fail_with
        self.deleted.append(job_id)

    async def aclose(self):
        pass

async def settle():
    """Let pending tasks run up to their next suspension point."""
    for _ in range(5):
        await asyncio.sleep(0)
