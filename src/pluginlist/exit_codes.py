"""Exit codes for pluginlist CLI commands."""

# Success
SUCCESS = 0

# Errors
GENERAL_ERROR = 1
# 2 is used by typer for usage errors
REGISTRY_NOT_FOUND = 3
REGISTRY_INVALID = 4
REMOTE_CHECK_FAILED = 5
