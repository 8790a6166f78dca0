from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional, Type, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import ApiError
from .models import (
    Credential,
    JobMessageEachResponse,
    JobRequest,
    JobResponse,
    LastJobMessageIdResponse,
    TokenResponse,
)

T = TypeVar("T", bound=BaseModel)

API_PREFIX = "/api/v1"

NO_RESPONSE = 0
REQUEST_FAILED = -1

_MESSAGE_LIST = TypeAdapter(List[JobMessageEachResponse])


def job_path(id_or_uri: Union[int, str]) -> str:
    # URIs travel as a single path segment
    return f"{API_PREFIX}/jobs/{quote(str(id_or_uri), safe='')}"


class TriglavApi:
    """
    Endpoint layer for the Triglav REST API.
    - One coroutine per endpoint, returning Pydantic models
    - Every failure is raised as ApiError; no retries, no classification
    - The token is attached by the http client's auth flow, not here
    """

    def __init__(self, http: httpx.AsyncClient, *, logger: Optional[logging.Logger] = None):
        self.http = http
        self.log = logger or logging.getLogger("triglav_consumer.api")

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        operation: Optional[str] = None,
    ) -> Any:
        """
        Core request method.
        - Raises ApiError(code=0) when no response was received
        - Raises ApiError(code=<status>) on non-2xx responses
        - Returns parsed JSON, or None on an empty body
        """
        method = method.upper()
        start = time.perf_counter()
        try:
            resp = await self.http.request(method, url, params=params, json=json)
        except httpx.TransportError as exc:
            raise ApiError(
                code=NO_RESPONSE,
                message=f"no response: {exc.__class__.__name__}: {exc}",
                method=method,
                url=url,
            ) from exc
        except httpx.HTTPError as exc:
            raise ApiError(
                code=REQUEST_FAILED,
                message=f"{exc.__class__.__name__}: {exc}",
                method=method,
                url=url,
            ) from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        self.log.debug(
            "op.request",
            extra={
                "operation": operation,
                "method": method,
                "url": str(resp.request.url),
                "status": resp.status_code,
                "duration_ms": duration_ms,
            },
        )

        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_api_error(resp, method=method)

        return self._safe_json(resp, method=method)

    def _safe_json(self, resp: httpx.Response, *, method: str) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise ApiError(
                code=resp.status_code,
                message=f"expected JSON, got non-JSON body snippet: {snippet!r}",
                method=method,
                url=str(resp.request.url),
                response_body=snippet,
            ) from exc

    @staticmethod
    def _to_api_error(resp: httpx.Response, *, method: str) -> ApiError:
        try:
            body: Any = resp.json()
        except ValueError:
            body = (resp.text or "")[:500]
        return ApiError(
            code=resp.status_code,
            message=resp.reason_phrase or "request failed",
            method=method,
            url=str(resp.request.url),
            response_body=body,
        )

    @staticmethod
    def _validate(model: Type[T], payload: Any, *, method: str, url: str) -> T:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise ApiError(
                code=REQUEST_FAILED,
                message=f"response did not match model {model.__name__}: {exc}",
                method=method,
                url=url,
                response_body=payload,
            ) from exc

    # ── Auth ────────────────────────────────────────────────────────

    async def create_token(self, credential: Credential) -> TokenResponse:
        url = f"{API_PREFIX}/auth/token"
        payload = await self.request(
            "POST", url, json=credential.model_dump(), operation="create_token"
        )
        return self._validate(TokenResponse, payload, method="POST", url=url)

    # ── Job messages ────────────────────────────────────────────────

    async def fetch_job_messages(
        self, offset: int, job_id: int, *, limit: int
    ) -> List[JobMessageEachResponse]:
        url = f"{API_PREFIX}/job_messages"
        payload = await self.request(
            "GET",
            url,
            params={"offset": offset, "job_id": job_id, "limit": limit},
            operation="fetch_job_messages",
        )
        try:
            return _MESSAGE_LIST.validate_python(payload or [])
        except ValidationError as exc:
            raise ApiError(
                code=REQUEST_FAILED,
                message=f"response did not match a list of job messages: {exc}",
                method="GET",
                url=url,
                response_body=payload,
            ) from exc

    async def get_last_job_message_id(self) -> LastJobMessageIdResponse:
        url = f"{API_PREFIX}/job_messages/last_id"
        payload = await self.request("GET", url, operation="get_last_job_message_id")
        return self._validate(LastJobMessageIdResponse, payload, method="GET", url=url)

    # ── Jobs ────────────────────────────────────────────────────────

    async def create_or_update_job(self, job_request: JobRequest) -> JobResponse:
        url = f"{API_PREFIX}/jobs"
        payload = await self.request(
            "PUT",
            url,
            json=job_request.model_dump(exclude_none=True),
            operation="create_or_update_job",
        )
        return self._validate(JobResponse, payload, method="PUT", url=url)

    async def get_job(self, id_or_uri: Union[int, str]) -> JobResponse:
        url = job_path(id_or_uri)
        payload = await self.request("GET", url, operation="get_job")
        return self._validate(JobResponse, payload, method="GET", url=url)

    async def delete_job(self, id_or_uri: Union[int, str]) -> None:
        await self.request("DELETE", job_path(id_or_uri), operation="delete_job")


__all__ = ["TriglavApi", "API_PREFIX", "NO_RESPONSE", "REQUEST_FAILED", "job_path"]
