"""Move the current content of a DA location into a timestamped backup folder."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from .client import BackupFolder, DAAdminClient, SourceItem
from .config import RESERVED_ITEMS, ActionInputs
from .credentials import CredentialError
from .reporter import Reporter
from .utils import file_name

NO_BACKUP_NEEDED = "no-backup-needed"
FAILURE_MARKER = "❌"


@dataclass
class RunResult:
    succeeded: bool
    backup_folder_name: Optional[str] = None
    error_message: Optional[str] = None
    moved_count: int = 0
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


@dataclass
class BackupRunner:
    token_provider: Callable[[], Optional[str]]
    client_factory: Callable[[str], DAAdminClient]
    reporter: Reporter = field(default_factory=Reporter)
    reserved_items: Sequence[str] = RESERVED_ITEMS
    clock: Optional[Callable[[], datetime]] = None

    def run(self, inputs: ActionInputs) -> RunResult:
        """Back up everything at ``/{org}/{repo}/{path}``.

        Failures before the move loop end the run and are reported through
        the ``error_message`` output. A failed move only skips that item.
        """

        reporter = self.reporter
        try:
            inputs.validate()
            reporter.info(f"Starting DA backup for {inputs.describe()}")

            token = self.token_provider()
            if not token:
                raise CredentialError(
                    "No access token available. Please configure DA_CLIENT_ID, "
                    "DA_CLIENT_SECRET, DA_SERVICE_TOKEN or IMS_TOKEN secrets."
                )
            client = self.client_factory(token)

            sources = client.list_sources(inputs.org, inputs.repo, inputs.path)
            reporter.info(f"Found {len(sources)} sources to process")
            if sources:
                reporter.info("Sources found:")
            for index, source in enumerate(sources, 1):
                reporter.info(f"  {index}. {json.dumps(source.to_dict())}")

            if not sources:
                reporter.info("No sources found to backup")
                reporter.set_output("backup_folder_name", NO_BACKUP_NEEDED)
                return RunResult(succeeded=True, backup_folder_name=NO_BACKUP_NEEDED)

            now = self.clock() if self.clock else None
            backup = client.create_backup_folder(inputs.org, inputs.repo, inputs.path, now=now)
            result = self._move_sources(client, inputs, sources, backup)
        except Exception as exc:
            reporter.error(f"DA backup failed: {exc}")
            error_message = f"{FAILURE_MARKER} DA backup failed: {exc}"
            reporter.set_output("error_message", error_message)
            reporter.set_failed(str(exc))
            return RunResult(succeeded=False, error_message=error_message)

        reporter.info(f"Backup completed. Moved {result.moved_count} items to {backup.name}")
        reporter.set_output("backup_folder_name", backup.name)
        return result

    # ------------------------------------------------------------------
    def _move_sources(
        self,
        client: DAAdminClient,
        inputs: ActionInputs,
        sources: List[SourceItem],
        backup: BackupFolder,
    ) -> RunResult:
        result = RunResult(succeeded=True, backup_folder_name=backup.name)
        for source in sources:
            if source.name in self.reserved_items:
                self.reporter.info(f"Skipping reserved item: {source.name}")
                result.skipped.append(source.name)
                continue

            if not source.path or not source.name:
                self.reporter.warning(f"Source missing required properties: {json.dumps(source.to_dict())}")
                result.skipped.append(source.name or source.path or "")
                continue

            dest_path = f"/{inputs.org}/{inputs.repo}/{backup.path}/{file_name(source.name, source.ext)}"
            try:
                client.move_source(source.path, dest_path)
            except Exception as exc:
                self.reporter.warning(f"Failed to move {source.path} to {backup.name}: {exc}")
                result.failed.append(source.path)
                continue
            self.reporter.info(f"Moved {source.path} to {dest_path}")
            result.moved_count += 1
        return result


__all__ = ["BackupRunner", "NO_BACKUP_NEEDED", "RunResult"]
