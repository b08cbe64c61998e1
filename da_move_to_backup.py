"""Command line interface for the DA move-to-backup step."""
from __future__ import annotations

import argparse
import logging
import sys
from functools import partial
from pathlib import Path
from typing import Iterable, Optional

from da_backup.backup import BackupRunner
from da_backup.client import DAAdminClient
from da_backup.config import ActionInputs, ConfigError, Settings, inputs_from_env, load_config, resolve_inputs
from da_backup.credentials import CredentialChain
from da_backup.reporter import ActionsReporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Move the current content of a DA location into a timestamped backup folder.",
    )
    parser.add_argument("--org", help="DA organization (default: INPUT_ORG).")
    parser.add_argument("--repo", help="DA repository (default: INPUT_REPO).")
    parser.add_argument("--path", help="Path inside the repository to back up (default: INPUT_PATH).")
    parser.add_argument("--config", default="config.yaml", help="Path to the configuration file.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase logging verbosity.")
    return parser


def configure_logging(level: int) -> None:
    if level >= 1:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO
    logging.basicConfig(level=log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def load_settings(path: Path) -> Settings:
    try:
        return load_config(path)
    except ConfigError as exc:
        print(f"Error reading configuration: {exc}", file=sys.stderr)
        sys.exit(1)


def create_runner(settings: Settings, reporter: ActionsReporter) -> BackupRunner:
    chain = CredentialChain.default()
    client_factory = partial(
        DAAdminClient,
        base_url=settings.base_url,
        timeout=settings.timeout,
        reporter=reporter,
    )
    return BackupRunner(
        token_provider=chain.get_token,
        client_factory=client_factory,
        reporter=reporter,
        reserved_items=settings.reserved_items,
    )


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    settings = load_settings(Path(args.config))
    inputs = resolve_inputs(
        ActionInputs(org=args.org, repo=args.repo, path=args.path),
        inputs_from_env(),
        settings.inputs,
    )

    reporter = ActionsReporter.from_env()
    result = create_runner(settings, reporter).run(inputs)
    return 0 if result.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
