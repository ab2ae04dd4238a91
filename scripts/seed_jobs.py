"""
Seed a running Job Tracker service with a few sample applications.

Usage: python scripts/seed_jobs.py   (reads JOBTRACKER_API_URL)
"""
import asyncio
import logging
from datetime import date

from jobtracker.client.tracker import JobTracker
from jobtracker.core.logging import setup_logging

logger = logging.getLogger(__name__)

SAMPLE_JOBS = [
    {"title": "Backend Engineer", "company": "Acme", "status": "applied",
     "source": "LinkedIn", "place": "Bangalore", "salary": 2400000, "date_applied": date(2024, 3, 15)},
    {"title": "Data Engineer", "company": "Globex", "status": "interviewing",
     "source": "Referral", "place": "Remote", "notes": "Second round on Friday"},
    {"title": "Platform Engineer", "company": "Initech", "status": "not_applied",
     "place": "Pune"},
]

async def seed():
    async with JobTracker() as tracker:
        existing = {(job.title, job.company) for job in tracker.store.jobs}
        for sample in SAMPLE_JOBS:
            if (sample["title"], sample["company"]) in existing:
                print(f"{sample['title']} @ {sample['company']} already exists. Skipping.")
                continue
            tracker.create.reset()
            for name, value in sample.items():
                tracker.create.set_field(name, value)
            job = await tracker.create.submit()
            if job is None:
                print(f"Could not create {sample['title']} @ {sample['company']}: "
                      f"{tracker.create.errors or tracker.notifier.latest().message}")
            else:
                print(f"Created {job.id} -> {job.title} @ {job.company}")

        print(f"{len(tracker.store.jobs)} jobs on the server")

if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
