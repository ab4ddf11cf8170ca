"""Error types and formatting utilities for pluginlist.

Provides the registry validation error taxonomy, the loading and sync
exceptions, and the last-resort CLI error handler.
"""

import json
from enum import Enum

import yaml

from pluginlist import cli_logger, exit_codes

UNKNOWN_PLUGIN = "unknown"


class ErrorKind(str, Enum):
    """Kinds of registry validation failures."""

    MISSING_FIELD = "MissingField"
    INVALID_TIMESTAMP = "InvalidTimestamp"
    DESCRIPTION_TOO_LONG = "DescriptionTooLong"
    INVALID_LICENSE = "InvalidLicense"
    MISSING_AUTHOR_NAME = "MissingAuthorName"
    INVALID_AUTHOR_HOMEPAGE = "InvalidAuthorHomepage"
    INVALID_REPO_KIND = "InvalidRepoKind"
    INVALID_REPO_URL = "InvalidRepoUrl"
    MISSING_BRANCH = "MissingBranch"
    UNEXPECTED_BRANCH = "UnexpectedBranch"
    INVALID_VARIANT = "InvalidVariant"
    INVALID_HOMEPAGE = "InvalidHomepage"
    INVALID_FILE_URL = "InvalidFileUrl"
    MISSING_FILES = "MissingFiles"
    DUPLICATE_NAME = "DuplicateName"
    REMOTE_FETCH_FAILED = "RemoteFetchFailed"
    REMOTE_MANIFEST_INCOMPLETE = "RemoteManifestIncomplete"

    @property
    def is_remote(self) -> bool:
        """Return True for failures raised by remote cross-validation."""
        return self in (ErrorKind.REMOTE_FETCH_FAILED, ErrorKind.REMOTE_MANIFEST_INCOMPLETE)


class RegistryError(Exception):
    """Raised when a registry entry violates a validation rule.

    Attributes:
        kind: Which rule was violated.
        plugin: Name of the offending plugin, or "unknown".
        detail: Rule-specific message without the plugin prefix.
        repository_url: Offending repository URL (remote checks only).
        reason: Underlying transport failure reason (remote checks only).
    """

    def __init__(
        self,
        kind: ErrorKind,
        plugin: str | None,
        detail: str,
        repository_url: str | None = None,
        reason: str | None = None,
    ) -> None:
        """Initialize with the violated rule and its context."""
        self.kind = kind
        self.plugin = plugin or UNKNOWN_PLUGIN
        self.detail = detail
        self.repository_url = repository_url
        self.reason = reason
        message = f"Plugin '{self.plugin}': {detail}"
        if repository_url:
            message += f" (repository {repository_url})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class RegistryLoadError(Exception):
    """Raised when the registry file cannot be read or has no plugin list."""


class ManifestSyncError(Exception):
    """Raised when copying the plugin list into the manifest fails."""


def handle_cli_error(error: Exception) -> int:
    """Handle an unhandled exception at the CLI boundary.

    Formats the error into a clean user-friendly message and returns
    an appropriate exit code, so raw tracebacks never reach the user.

    Args:
        error: The exception to handle.

    Returns:
        An exit code from exit_codes.
    """
    if isinstance(error, RegistryError):
        cli_logger.error(str(error))
        if error.kind.is_remote:
            return exit_codes.REMOTE_CHECK_FAILED
        return exit_codes.REGISTRY_INVALID

    if isinstance(error, (RegistryLoadError, ManifestSyncError)):
        cli_logger.error(str(error))
        return exit_codes.GENERAL_ERROR

    if isinstance(error, OSError):
        if error.filename:
            cli_logger.error(f"{error.strerror}: {error.filename}")
        else:
            cli_logger.error(str(error))
        return exit_codes.GENERAL_ERROR

    if isinstance(error, json.JSONDecodeError):
        cli_logger.error(f"Invalid JSON: {error}")
        return exit_codes.GENERAL_ERROR

    if isinstance(error, yaml.YAMLError):
        cli_logger.error(f"Invalid YAML: {error}")
        return exit_codes.GENERAL_ERROR

    cli_logger.error(f"Unexpected error: {error}")
    return exit_codes.GENERAL_ERROR
