import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()

class ClientSettings(BaseModel):
    api_url: str = Field(default=os.getenv("JOBTRACKER_API_URL", "http://127.0.0.1:8000/api"))
    timeout: float = Field(default=float(os.getenv("JOBTRACKER_TIMEOUT", "5")))  # seconds
    # strftime pattern used wherever a date_applied is shown to the user
    date_format: str = Field(default=os.getenv("JOBTRACKER_DATE_FORMAT", "%x"))
    notification_history: int = Field(default=int(os.getenv("JOBTRACKER_NOTIFICATION_HISTORY", "20")))

class Config(BaseModel):
    app_name: str = "Job Tracker"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./jobs.db")

    version: str = "0.1.0"
    request_id_header: str = "X-Request-ID"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Persistence client used by the tracker workflows
    client: ClientSettings = ClientSettings()

settings = Config()

if settings.client.timeout <= 0:
    raise RuntimeError(
        f"FATAL: JOBTRACKER_TIMEOUT must be positive, got {settings.client.timeout}."
    )
