"""Offline stand-in for TriglavClient: fixed example data, no network access."""

import logging
from typing import Any, Dict, List, Optional, Union

from .models import (
    JobMessageEachResponse,
    JobRequest,
    JobResponse,
    LastJobMessageIdResponse,
    ResourceResponse,
)

EXAMPLE_JOB_URI = "http://localhost:3000/app/project//taskset/1/task/"
EXAMPLE_RESOURCE_URI = "https://bigquery.cloud.google.com/table/project_id:dataset.table"


def example_message() -> JobMessageEachResponse:
    return JobMessageEachResponse(id=1, job_id=1, time=1476025200, timezone="+09:00")


def example_job() -> JobResponse:
    return JobResponse(
        id=1,
        uri=EXAMPLE_JOB_URI,
        input_resources=[
            ResourceResponse(
                id=1,
                uri=EXAMPLE_RESOURCE_URI,
                unit="daily",
                timezone="+09:00",
                span_in_days=32,
                consumable=True,
                notifiable=False,
            )
        ],
        output_resources=[
            ResourceResponse(
                id=1,
                uri=EXAMPLE_RESOURCE_URI,
                unit="daily",
                timezone="+09:00",
                span_in_days=32,
                consumable=False,
                notifiable=False,
            )
        ],
    )


class StubClient:
    """
    Same operation surface as TriglavClient.
    Connection settings are accepted and kept but never used.
    """

    def __init__(
        self,
        *,
        url: str = "",
        username: str = "",
        password: str = "",
        authenticator: str = "local",
        logger: Optional[logging.Logger] = None,
        **_: Any,
    ):
        self.url = url
        self.username = username
        self.password = password
        self.authenticator = authenticator
        self.log = logger or logging.getLogger("triglav_consumer.stub")

    async def aclose(self) -> None:
        return None

    async def __aenter__(self) -> "StubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def fetch_messages(
        self, offset: int, job_id: int, *, limit: int = 100
    ) -> List[JobMessageEachResponse]:
        return [example_message()]

    async def create_or_update_job(
        self, job_request: Union[JobRequest, Dict[str, Any]]
    ) -> JobResponse:
        return example_job()

    async def get_job(self, id_or_uri: Union[int, str]) -> JobResponse:
        return example_job()

    async def delete_job(self, id_or_uri: Union[int, str]) -> None:
        return None

    async def get_last_message_id(self) -> LastJobMessageIdResponse:
        return LastJobMessageIdResponse(id=1)


__all__ = ["StubClient", "example_job", "example_message"]
