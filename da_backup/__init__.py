"""Back up DA content into a timestamped folder before it is overwritten."""

from .backup import NO_BACKUP_NEEDED, BackupRunner, RunResult
from .client import BackupFolder, DAAdminClient, DAAdminError, SourceItem
from .config import ActionInputs, ConfigError, Settings
from .credentials import CredentialChain, CredentialError
from .reporter import ActionsReporter, Reporter

__version__ = "1.0.0"

__all__ = [
    "ActionInputs",
    "ActionsReporter",
    "BackupFolder",
    "BackupRunner",
    "ConfigError",
    "CredentialChain",
    "CredentialError",
    "DAAdminClient",
    "DAAdminError",
    "NO_BACKUP_NEEDED",
    "Reporter",
    "RunResult",
    "Settings",
    "SourceItem",
]
