"""Access token resolution for the DA Admin API."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional

import requests

from .utils import mask_sensitive

LOGGER = logging.getLogger(__name__)

IMS_TOKEN_URL = "https://ims-na1.adobelogin.com/ims/token/v3"

TokenProvider = Callable[[], Optional[str]]


class CredentialError(Exception):
    """Raised when no usable access token can be obtained."""


@dataclass
class ImsTokenExchange:
    """Exchange a DA service token for an IMS access token."""

    client_id: Optional[str]
    client_secret: Optional[str]
    service_token: Optional[str]
    token_url: str = IMS_TOKEN_URL
    timeout: Optional[float] = None
    session: requests.Session = field(default_factory=requests.Session)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **kwargs) -> "ImsTokenExchange":
        environ = os.environ if environ is None else environ
        return cls(
            client_id=environ.get("DA_CLIENT_ID"),
            client_secret=environ.get("DA_CLIENT_SECRET"),
            service_token=environ.get("DA_SERVICE_TOKEN"),
            **kwargs,
        )

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret and self.service_token)

    def __call__(self) -> Optional[str]:
        if not self.configured:
            LOGGER.debug("DA_CLIENT_ID, DA_CLIENT_SECRET or DA_SERVICE_TOKEN not set, skipping IMS exchange.")
            return None
        secrets = (self.client_secret, self.service_token)
        try:
            response = self.session.post(
                self.token_url,
                data={
                    "grant_type": "authorization_code",
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": self.service_token,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise CredentialError(mask_sensitive(f"IMS token request failed: {exc}", secrets)) from exc
        if not response.ok:
            raise CredentialError(
                mask_sensitive(f"IMS token exchange failed with HTTP {response.status_code}: {response.text}", secrets)
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise CredentialError("IMS token response is not valid JSON.") from exc
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise CredentialError("IMS token response does not contain an access_token.")
        LOGGER.info("Obtained access token from IMS.")
        return token


def env_token(name: str, environ: Optional[Mapping[str, str]] = None) -> TokenProvider:
    def provider() -> Optional[str]:
        source = os.environ if environ is None else environ
        value = (source.get(name) or "").strip()
        if value:
            LOGGER.info("Using access token from %s.", name)
        return value or None

    provider.__name__ = f"env_token({name})"
    return provider


@dataclass
class CredentialChain:
    """Try token providers in order and return the first token obtained.

    A provider returns ``None`` when it has nothing to offer. A provider that
    raises :class:`CredentialError` is logged and the next one is tried.
    """

    providers: List[TokenProvider] = field(default_factory=list)
    logger: logging.Logger = LOGGER

    @classmethod
    def default(cls, environ: Optional[Mapping[str, str]] = None) -> "CredentialChain":
        return cls(providers=[ImsTokenExchange.from_env(environ), env_token("IMS_TOKEN", environ)])

    def get_token(self) -> Optional[str]:
        for provider in self.providers:
            try:
                token = provider()
            except CredentialError as exc:
                self.logger.warning("%s: %s", _provider_name(provider), exc)
                continue
            if token:
                return token
        return None


def _provider_name(provider: TokenProvider) -> str:
    return getattr(provider, "__name__", type(provider).__name__)


__all__ = [
    "CredentialChain",
    "CredentialError",
    "IMS_TOKEN_URL",
    "ImsTokenExchange",
    "env_token",
]
