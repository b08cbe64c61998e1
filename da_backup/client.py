"""Client for the DA Admin API."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

import requests

from .config import DA_ADMIN_API
from .reporter import Reporter
from .utils import backup_timestamp, encode_path, join_path

LOGGER = logging.getLogger(__name__)


class DAAdminError(Exception):
    """Raised when a DA Admin API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


@dataclass
class SourceItem:
    name: Optional[str] = None
    path: Optional[str] = None
    ext: Optional[str] = None
    extra: Dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict) -> "SourceItem":
        known = {
            "name": data.get("name"),
            "path": data.get("path"),
            "ext": data.get("ext"),
        }
        extra = {key: value for key, value in data.items() if key not in known}
        return cls(extra=extra, **known)

    def to_dict(self) -> Dict:
        result: Dict[str, object] = {"name": self.name, "path": self.path, "ext": self.ext}
        result.update(self.extra)
        return {key: value for key, value in result.items() if value is not None}


@dataclass(frozen=True)
class BackupFolder:
    name: str
    path: str


@dataclass
class DAAdminClient:
    token: str
    base_url: str = DA_ADMIN_API
    timeout: Optional[float] = None
    reporter: Reporter = field(default_factory=Reporter)
    session: requests.Session = field(default_factory=requests.Session)

    def _headers(self, multipart: bool) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
        }
        # requests writes the multipart boundary into Content-Type itself.
        if not multipart:
            headers["Content-Type"] = "application/json"
        return headers

    def request(self, method: str, endpoint: str, *, files: Optional[Dict] = None):
        """Send a request and return the decoded body.

        Returns ``None`` for ``204 No Content``, parsed JSON when the response
        says so and the raw text otherwise.
        """

        url = self.base_url.rstrip("/") + endpoint
        LOGGER.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(multipart=files is not None),
                files=files,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            message = f"DA Admin API request failed: {exc}"
            self.reporter.warning(message)
            raise DAAdminError(message) from exc

        if not response.ok:
            message = f"DA Admin API error {response.status_code}: {response.text}"
            self.reporter.warning(message)
            raise DAAdminError(message, status_code=response.status_code, body=response.text)

        if response.status_code == 204:
            return None
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError as exc:
                message = f"DA Admin API returned invalid JSON ({response.status_code}): {exc}"
                self.reporter.warning(message)
                raise DAAdminError(message, status_code=response.status_code, body=response.text) from exc
        return response.text

    # ------------------------------------------------------------------
    def list_sources(self, org: str, repo: str, path: str = "") -> List[SourceItem]:
        data = self.request("GET", f"/list/{org}/{repo}/{path}")
        # The API answers with a bare array, the docs describe {"sources": [...]}.
        if isinstance(data, dict):
            data = data.get("sources") or []
        if not isinstance(data, list):
            raise DAAdminError(f"Unexpected listing response for /{org}/{repo}/{path}: {data!r}")
        # Entries that are not objects stay in the listing so the move loop can flag them.
        return [
            SourceItem.from_dict(item) if isinstance(item, dict) else SourceItem(extra={"value": item})
            for item in data
        ]

    def create_backup_folder(
        self,
        org: str,
        repo: str,
        parent_path: str = "",
        now: Optional[datetime] = None,
    ) -> BackupFolder:
        name = f"backup-{backup_timestamp(now)}"
        folder = BackupFolder(name=name, path=join_path(parent_path, name))
        self.request("POST", f"/source/{org}/{repo}/{folder.path}")
        self.reporter.info(f"Created backup folder: {folder.name}")
        return folder

    def move_source(self, source_path: str, dest_path: str) -> None:
        endpoint = f"/move{encode_path(source_path)}"
        self.request("POST", endpoint, files={"destination": (None, dest_path)})


__all__ = ["BackupFolder", "DAAdminClient", "DAAdminError", "SourceItem"]
