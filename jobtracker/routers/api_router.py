from fastapi import APIRouter
from jobtracker.routers import jobs

# Centralized API router hub: main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(jobs.router, tags=["Jobs"])
