from __future__ import annotations

import os
import ssl
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from urllib.parse import urlsplit

from dotenv import load_dotenv

AUTHENTICATORS = ("local", "ldap")
DEFAULT_TIMEOUT_SECONDS = 30.0

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def _origin(url: str) -> str:
    """scheme://host:port of `url`; any path is dropped."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.hostname:
        raise ValueError(f"url must include a scheme and host, got {url!r}.")
    port = parts.port or (443 if parts.scheme == "https" else 80)
    # IPv6 literals keep their brackets
    host = f"[{parts.hostname}]" if ":" in parts.hostname else parts.hostname
    return f"{parts.scheme}://{host}:{port}"


@dataclass(frozen=True)
class ClientConfig:
    url: str
    username: str
    password: str = field(repr=False)
    authenticator: str = "local"
    timeout: Optional[float] = None
    debugging: bool = False
    verify_ssl: Optional[bool] = None
    verify_ssl_host: Optional[bool] = None
    ssl_ca_cert: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("url must be provided.")
        if not self.username:
            raise ValueError("username must be provided.")
        if not self.password:
            raise ValueError("password must be provided.")
        if self.authenticator not in AUTHENTICATORS:
            raise ValueError(
                f"authenticator must be one of {AUTHENTICATORS}, "
                f"got {self.authenticator!r}."
            )
        _origin(self.url)

    @property
    def base_url(self) -> str:
        return _origin(self.url)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout if self.timeout is not None else DEFAULT_TIMEOUT_SECONDS

    def ssl_verify(self) -> Union[bool, ssl.SSLContext]:
        """
        Value for httpx's `verify=`.
        Unset TLS options leave httpx's default verification in place.
        """
        tls_options = (
            self.verify_ssl,
            self.verify_ssl_host,
            self.ssl_ca_cert,
            self.cert_file,
        )
        if all(opt is None for opt in tls_options):
            return True

        ctx = ssl.create_default_context(cafile=self.ssl_ca_cert)
        if self.verify_ssl is False:
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
        elif self.verify_ssl_host is False:
            ctx.check_hostname = False
        if self.cert_file:
            ctx.load_cert_chain(self.cert_file, keyfile=self.key_file)
        return ctx


def _env_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return None
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}.")


def _env_str(name: str) -> Optional[str]:
    val = os.getenv(name, "").strip()
    return val or None


def load_env_config(*, use_dotenv: bool = True) -> Dict[str, Any]:
    """Load Triglav connection settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    timeout = _env_str("TRIGLAV_TIMEOUT")
    return {
        "url": os.getenv("TRIGLAV_URL", "").strip(),
        "username": os.getenv("TRIGLAV_USERNAME", "").strip(),
        "password": os.getenv("TRIGLAV_PASSWORD", ""),
        "authenticator": os.getenv("TRIGLAV_AUTHENTICATOR", "local").strip(),
        "timeout": float(timeout) if timeout else None,
        "debugging": bool(_env_bool("TRIGLAV_DEBUG")),
        "verify_ssl": _env_bool("TRIGLAV_VERIFY_SSL"),
        "verify_ssl_host": _env_bool("TRIGLAV_VERIFY_SSL_HOST"),
        "ssl_ca_cert": _env_str("TRIGLAV_SSL_CA_CERT"),
        "cert_file": _env_str("TRIGLAV_CERT_FILE"),
        "key_file": _env_str("TRIGLAV_KEY_FILE"),
    }


def create_client_from_env(*, stub: bool = False, use_dotenv: bool = True, **kwargs):
    """
    Create a client from environment variables.
    stub=True returns a StubClient with the same surface and no network access.
    """
    # deferred: client modules import this one
    from .client import TriglavClient
    from .stub import StubClient

    settings = load_env_config(use_dotenv=use_dotenv)
    settings.update(kwargs)
    if stub:
        return StubClient(**settings)
    if not settings["url"] or not settings["username"] or not settings["password"]:
        raise ValueError(
            "Missing TRIGLAV_URL, TRIGLAV_USERNAME or TRIGLAV_PASSWORD in environment."
        )
    return TriglavClient(**settings)


__all__ = [
    "AUTHENTICATORS",
    "DEFAULT_TIMEOUT_SECONDS",
    "ClientConfig",
    "load_env_config",
    "create_client_from_env",
]
