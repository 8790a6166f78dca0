from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Authenticator = Literal["local", "ldap"]


# --- Auth ---


class Credential(BaseModel):
    username: str
    password: str = Field(repr=False)
    authenticator: Authenticator = "local"

    model_config = ConfigDict(extra="forbid", frozen=True)


class TokenResponse(BaseModel):
    access_token: str

    model_config = ConfigDict(extra="ignore")


# --- Input Models (Request Payloads) ---


class ResourceRequest(BaseModel):
    id: Optional[int] = None
    uri: str
    unit: Optional[str] = None
    timezone: str = "+00:00"
    span_in_days: Optional[int] = None
    consumable: bool = False
    notifiable: bool = False

    model_config = ConfigDict(extra="forbid")


class JobRequest(BaseModel):
    """
    Payload for create-or-update.
    A job is matched by id when given, otherwise by uri. Resource lists keep
    the caller's order.
    """

    id: Optional[int] = None
    uri: str
    input_resources: List[ResourceRequest] = Field(default_factory=list)
    output_resources: List[ResourceRequest] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


# --- Response Models ---


class ResourceResponse(BaseModel):
    id: Optional[int] = None
    uri: str
    unit: Optional[str] = None
    timezone: Optional[str] = None
    span_in_days: Optional[int] = None
    consumable: bool = False
    notifiable: bool = False

    model_config = ConfigDict(extra="ignore")


class JobResponse(BaseModel):
    id: int
    uri: str
    input_resources: List[ResourceResponse] = Field(default_factory=list)
    output_resources: List[ResourceResponse] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class JobMessageEachResponse(BaseModel):
    id: int
    job_id: int
    time: int
    timezone: str

    model_config = ConfigDict(extra="ignore")


class LastJobMessageIdResponse(BaseModel):
    id: int

    model_config = ConfigDict(extra="ignore")


__all__ = [
    "Authenticator",
    "Credential",
    "TokenResponse",
    "ResourceRequest",
    "JobRequest",
    "ResourceResponse",
    "JobResponse",
    "JobMessageEachResponse",
    "LastJobMessageIdResponse",
]
