"""
Triglav consumer client.

Authenticates lazily, keeps the access token on the client instance for its
whole lifetime, and re-authenticates automatically when the server reports
the token as no longer valid.

    async with TriglavClient(url=..., username=..., password=...) as client:
        job = await client.create_or_update_job(job_request)
        messages = await client.fetch_messages(offset, job.id, limit=100)
"""

import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar, Union

import httpx

from .api import TriglavApi
from .config import ClientConfig
from .errors import (
    ApiError,
    TriglavAuthenticationError,
    TriglavClientError,
    TriglavConnectionError,
)
from .models import (
    Credential,
    JobMessageEachResponse,
    JobRequest,
    JobResponse,
    LastJobMessageIdResponse,
)
from .token_store import TokenAuth, TokenStore

R = TypeVar("R")

# re-authentications allowed per operation
MAX_AUTH_RETRIES = 1


class TriglavClient:
    """
    Client for the Triglav job/message API.
    - Every public operation funnels through `invoke`
    - ApiError never escapes; callers see TriglavClientError and subclasses
    - Credentials are fixed at construction and reused for every re-auth
    """

    def __init__(
        self,
        *,
        url: str,
        username: str,
        password: str,
        authenticator: str = "local",
        timeout: Optional[float] = None,
        debugging: bool = False,
        verify_ssl: Optional[bool] = None,
        verify_ssl_host: Optional[bool] = None,
        ssl_ca_cert: Optional[str] = None,
        cert_file: Optional[str] = None,
        key_file: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.config = ClientConfig(
            url=url,
            username=username,
            password=password,
            authenticator=authenticator,
            timeout=timeout,
            debugging=debugging,
            verify_ssl=verify_ssl,
            verify_ssl_host=verify_ssl_host,
            ssl_ca_cert=ssl_ca_cert,
            cert_file=cert_file,
            key_file=key_file,
        )
        self.credential = Credential(
            username=username, password=password, authenticator=authenticator
        )
        self.log = logger or logging.getLogger("triglav_consumer.client")

        self.token_store = TokenStore()

        self._owns_http = http is None
        if http is None:
            http = self._build_http()
        else:
            http.auth = TokenAuth(self.token_store)
        self.http = http
        self.api = TriglavApi(self.http, logger=self.log)

    def _build_http(self) -> httpx.AsyncClient:
        event_hooks: Dict[str, List[Callable[..., Any]]] = {}
        if self.config.debugging:
            event_hooks = {
                "request": [self._log_request],
                "response": [self._log_response],
            }
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            auth=TokenAuth(self.token_store),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=self.config.timeout_seconds,
            verify=self.config.ssl_verify(),
            event_hooks=event_hooks,
        )

    async def _log_request(self, request: httpx.Request) -> None:
        self.log.debug(
            "http.request", extra={"method": request.method, "url": str(request.url)}
        )

    async def _log_response(self, response: httpx.Response) -> None:
        self.log.debug(
            "http.response",
            extra={
                "method": response.request.method,
                "url": str(response.request.url),
                "status": response.status_code,
            },
        )

    @property
    def url(self) -> str:
        return self.config.url

    @property
    def username(self) -> str:
        return self.config.username

    @property
    def authenticator(self) -> str:
        return self.config.authenticator

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "TriglavClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ── Public operations ───────────────────────────────────────────

    async def fetch_messages(
        self, offset: int, job_id: int, *, limit: int = 100
    ) -> List[JobMessageEachResponse]:
        """Fetch up to `limit` messages of `job_id` starting at message id `offset`."""
        return await self.invoke(
            lambda: self.api.fetch_job_messages(offset, job_id, limit=limit),
            operation="fetch_messages",
        )

    async def create_or_update_job(
        self, job_request: Union[JobRequest, Dict[str, Any]]
    ) -> JobResponse:
        """
        Create a job, or update it when one with the same id (or uri) exists.
        Accepts a JobRequest or a dict that validates into one.
        """
        if not isinstance(job_request, JobRequest):
            job_request = JobRequest.model_validate(job_request)
        return await self.invoke(
            lambda: self.api.create_or_update_job(job_request),
            operation="create_or_update_job",
        )

    async def get_job(self, id_or_uri: Union[int, str]) -> JobResponse:
        return await self.invoke(
            lambda: self.api.get_job(id_or_uri), operation="get_job"
        )

    async def delete_job(self, id_or_uri: Union[int, str]) -> None:
        await self.invoke(lambda: self.api.delete_job(id_or_uri), operation="delete_job")

    async def get_last_message_id(self) -> LastJobMessageIdResponse:
        return await self.invoke(
            self.api.get_last_job_message_id, operation="get_last_message_id"
        )

    # ── Auth / invocation ───────────────────────────────────────────

    async def authenticate(self, *, stale_token: Optional[str] = None) -> None:
        """
        Obtain a new token and store it.
        Concurrent callers are serialized on the store's lock; a caller that
        finds the token already replaced (it differs from `stale_token`, or
        the store is no longer empty) reuses it instead of authenticating again.
        """
        async with self.token_store.lock:
            current = self.token_store.get()
            if current and current != (stale_token or ""):
                return
            await self._create_token()

    async def _create_token(self) -> None:
        start = time.perf_counter()
        try:
            result = await self.api.create_token(self.credential)
        except ApiError as exc:
            raise self._auth_error(exc) from exc
        self.token_store.set(result.access_token)
        self.log.debug(
            "auth.request",
            extra={
                "operation": "create_token",
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )

    async def invoke(
        self,
        op: Callable[[], Awaitable[R]],
        *,
        operation: Optional[str] = None,
    ) -> R:
        """
        Run `op` with a valid token.
        - Authenticates first when no token is held (no retry on that path)
        - On an unauthorized response, re-authenticates and runs `op` once more
        - `op` must be safe to run twice
        """
        if not self.token_store.has_token():
            await self.authenticate()

        attempt = 0
        while True:
            token = self.token_store.get()
            try:
                return await op()
            except ApiError as exc:
                if exc.no_response:
                    raise self._connection_error(exc) from exc
                if exc.unauthorized and attempt < MAX_AUTH_RETRIES:
                    attempt += 1
                    self.log.info(
                        "auth.retry",
                        extra={"operation": operation, "attempt": attempt},
                    )
                    await self.authenticate(stale_token=token)
                    continue
                raise TriglavClientError(str(exc), exc) from exc

    def _connection_error(self, exc: ApiError) -> TriglavConnectionError:
        return TriglavConnectionError(f"Could not connect to {self.url}", exc)

    def _auth_error(self, exc: ApiError) -> TriglavClientError:
        if exc.no_response:
            return self._connection_error(exc)
        if exc.unauthorized:
            return TriglavAuthenticationError(
                "Failed to authenticate on triglav API.", exc
            )
        return TriglavClientError(str(exc), exc)


__all__ = ["TriglavClient", "MAX_AUTH_RETRIES"]
