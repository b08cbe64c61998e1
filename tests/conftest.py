"""Shared fixtures for the DA backup tests."""
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
import requests

from da_backup.client import BackupFolder, DAAdminError, SourceItem
from da_backup.reporter import Reporter
from da_backup.utils import join_path

FIXED_NOW = datetime(2025, 3, 4, 5, 6, 7, 891000, tzinfo=timezone.utc)
FIXED_FOLDER = "backup-2025-03-04T05-06-07"


class FakeClient:
    """Stands in for DAAdminClient and records every call."""

    def __init__(self, sources=None, fail_create=False, fail_list=False, fail_moves=()):
        self.sources = [SourceItem.from_dict(item) for item in (sources or [])]
        self.fail_create = fail_create
        self.fail_list = fail_list
        self.fail_moves = set(fail_moves)
        self.list_calls: List[tuple] = []
        self.create_calls: List[tuple] = []
        self.moves: List[tuple] = []

    def list_sources(self, org, repo, path=""):
        self.list_calls.append((org, repo, path))
        if self.fail_list:
            raise DAAdminError("DA Admin API error 500: boom", status_code=500, body="boom")
        return self.sources

    def create_backup_folder(self, org, repo, parent_path="", now=None):
        self.create_calls.append((org, repo, parent_path))
        if self.fail_create:
            raise DAAdminError("DA Admin API error 403: forbidden", status_code=403, body="forbidden")
        return BackupFolder(name=FIXED_FOLDER, path=join_path(parent_path, FIXED_FOLDER))

    def move_source(self, source_path, dest_path):
        if source_path in self.fail_moves:
            raise DAAdminError("DA Admin API error 404: not found", status_code=404, body="not found")
        self.moves.append((source_path, dest_path))


def make_response(
    status: int = 200,
    body: bytes = b"",
    content_type: Optional[str] = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.encoding = "utf-8"
    headers: Dict[str, str] = {}
    if content_type:
        headers["content-type"] = content_type
    response.headers.update(headers)
    return response


@pytest.fixture
def reporter():
    return Reporter()


@pytest.fixture
def fake_client_factory():
    """Return a factory that builds a FakeClient and remembers the token."""

    def build(**kwargs):
        client = FakeClient(**kwargs)

        def factory(token):
            factory.tokens.append(token)
            return client

        factory.tokens = []
        factory.client = client
        return factory

    return build
