"""Operation surface shared by TriglavClient and StubClient."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, Union, runtime_checkable

from .models import (
    JobMessageEachResponse,
    JobRequest,
    JobResponse,
    LastJobMessageIdResponse,
)


@runtime_checkable
class JobClient(Protocol):
    """Protocol for Triglav consumers; callers depend on this, not a concrete client."""

    async def fetch_messages(
        self, offset: int, job_id: int, *, limit: int = 100
    ) -> List[JobMessageEachResponse]: ...

    async def create_or_update_job(
        self, job_request: Union[JobRequest, Dict[str, Any]]
    ) -> JobResponse: ...

    async def get_job(self, id_or_uri: Union[int, str]) -> JobResponse: ...

    async def delete_job(self, id_or_uri: Union[int, str]) -> None: ...

    async def get_last_message_id(self) -> LastJobMessageIdResponse: ...

    async def aclose(self) -> None: ...


__all__ = ["JobClient"]
