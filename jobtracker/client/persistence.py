import logging
import uuid
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from jobtracker.core.config import settings
from jobtracker.core.exceptions import RequestError
from jobtracker.core.logging import request_id_var
from jobtracker.schemas.job import Job, JobCreate

class JobsClient:
    """
    Async client for the jobs persistence service.

    Every method either returns parsed models or raises RequestError carrying
    the HTTP status code (None for transport failures). Payloads are validated
    against JobCreate before they are serialized.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.client.api_url).rstrip("/")
        self.logger = logger or logging.getLogger(__name__)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.client.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "JobsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_jobs(self) -> List[Job]:
        data = await self._request("GET", "/jobs")
        if not isinstance(data, list):
            raise RequestError("Malformed job list response", body=data)
        return [self._parse_job(item) for item in data]

    async def create_job(self, payload: JobCreate) -> Job:
        body = self._serialize(payload)
        data = await self._request("POST", "/jobs", json=body)
        return self._parse_job(data)

    async def update_job(self, job_id: int, payload: JobCreate) -> Job:
        body = self._serialize(payload)
        data = await self._request("PUT", f"/jobs/{job_id}", json=body)
        return self._parse_job(data)

    async def delete_job(self, job_id: int) -> None:
        await self._request("DELETE", f"/jobs/{job_id}")

    def _serialize(self, payload: Any) -> dict:
        # Re-validate so a hand-built dict or a mutated model cannot slip through
        try:
            model = JobCreate.model_validate(
                payload.model_dump() if isinstance(payload, JobCreate) else payload
            )
        except ValidationError as e:
            raise ValueError(f"Invalid job payload: {e}") from e
        return model.model_dump(mode="json")

    def _parse_job(self, data: Any) -> Job:
        try:
            return Job.model_validate(data)
        except ValidationError as e:
            self.logger.error("Unexpected job shape from server", extra={"error": str(e)})
            raise RequestError("Malformed job response", body=data) from e

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        req_id = str(uuid.uuid4())
        token = request_id_var.set(req_id)
        url = f"{self.base_url}{path}"
        try:
            self.logger.debug("request", extra={"method": method, "url": url})
            try:
                response = await self._client.request(
                    method,
                    path,
                    json=json,
                    headers={settings.request_id_header: req_id},
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                try:
                    body = e.response.json()
                except ValueError:
                    body = e.response.text or None
                self.logger.warning(
                    "response error",
                    extra={"method": method, "url": url, "status_code": status_code},
                )
                raise RequestError(f"{method} {path} failed with {status_code}", status_code=status_code, body=body) from e
            except httpx.HTTPError as e:
                self.logger.warning(
                    "transport error",
                    extra={"method": method, "url": url, "error": str(e)},
                )
                raise RequestError(f"{method} {path} failed: {e}") from e

            self.logger.debug(
                "response",
                extra={"method": method, "url": url, "status_code": response.status_code},
            )
            if response.status_code == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise RequestError(f"{method} {path} returned invalid JSON", status_code=response.status_code) from e
        finally:
            request_id_var.reset(token)
