"""Registry validation rules.

Each rule inspects raw registry entries (as loaded from plugins.json,
with no prior schema enforcement) and raises RegistryError on the first
violation. validate_registry runs the rules in order and turns the
outcome into a ValidationResult.
"""

from collections.abc import Callable
from typing import Any

from pluginlist.errors import UNKNOWN_PLUGIN, ErrorKind, RegistryError
from pluginlist.formats import is_valid_timestamp, is_valid_url
from pluginlist.registry_schema import (
    DESCRIPTION_MAX_LENGTH,
    REQUIRED_FIELDS,
    PluginRecord,
    PluginType,
    RegistrySchema,
    RepositoryInfo,
    RepositoryKind,
)
from pluginlist.remote import Fetcher, check_remote
from pluginlist.validation import ValidationFailed, ValidationPassed, ValidationResult

PLUGIN_TYPES = {t.value for t in PluginType}
REPOSITORY_KINDS = {k.value for k in RepositoryKind}

# Required fields that must hold a non-empty string
STRING_FIELDS = {"name", "type", "description", "time", "home"}


def _plugin_name(plugin: Any) -> str | None:
    """Return the plugin's name if it has a usable one."""
    if isinstance(plugin, dict):
        name = plugin.get("name")
        if isinstance(name, str) and name:
            return name
    return None


def _fail(kind: ErrorKind, plugin: Any, detail: str) -> RegistryError:
    return RegistryError(kind, _plugin_name(plugin), detail)


def validate_unique_names(plugins: list[Any]) -> None:
    """Ensure no two plugins share a name (case-sensitive)."""
    seen: set[str] = set()
    for plugin in plugins:
        name = _plugin_name(plugin)
        if name is None:
            continue
        if name in seen:
            raise RegistryError(ErrorKind.DUPLICATE_NAME, name, f"duplicate plugin name '{name}'")
        seen.add(name)


def _check_required(plugin: Any) -> None:
    if not isinstance(plugin, dict):
        raise _fail(ErrorKind.MISSING_FIELD, plugin, "entry is not an object")

    for field in REQUIRED_FIELDS:
        value = plugin.get(field)
        if not value:
            raise _fail(ErrorKind.MISSING_FIELD, plugin, f"missing required field '{field}'")
        if field in STRING_FIELDS and not isinstance(value, str):
            raise _fail(ErrorKind.MISSING_FIELD, plugin, f"field '{field}' must be a string")


def validate_base_fields(plugin: Any) -> None:
    """Check required fields and per-field formats of one plugin.

    Order matters: the first failing check is the one reported.
    """
    _check_required(plugin)

    if not is_valid_timestamp(plugin["time"]):
        raise _fail(
            ErrorKind.INVALID_TIMESTAMP,
            plugin,
            f"time '{plugin['time']}' is not in YYYY-MM-DD HH:mm:ss format",
        )

    if len(plugin["description"]) > DESCRIPTION_MAX_LENGTH:
        raise _fail(
            ErrorKind.DESCRIPTION_TOO_LONG,
            plugin,
            f"description is longer than {DESCRIPTION_MAX_LENGTH} characters",
        )

    license_info = plugin["license"]
    if (
        not isinstance(license_info, dict)
        or not isinstance(license_info.get("name"), str)
        or not license_info.get("name")
        or not is_valid_url(license_info.get("url"))
    ):
        raise _fail(ErrorKind.INVALID_LICENSE, plugin, "license needs a name and a valid url")

    if not isinstance(plugin["author"], list):
        raise _fail(ErrorKind.MISSING_FIELD, plugin, "field 'author' must be a non-empty list")

    if not isinstance(plugin["repo"], list):
        raise _fail(ErrorKind.MISSING_FIELD, plugin, "field 'repo' must be a non-empty list")

    if plugin["type"] not in PLUGIN_TYPES:
        raise _fail(ErrorKind.INVALID_VARIANT, plugin, f"invalid plugin type '{plugin['type']}'")

    if not is_valid_url(plugin["home"]):
        raise _fail(ErrorKind.INVALID_HOMEPAGE, plugin, f"invalid homepage URL '{plugin['home']}'")


def validate_authors(plugin: dict[str, Any]) -> None:
    """Check every author has a name and a valid homepage."""
    for index, author in enumerate(plugin["author"]):
        name = author.get("name") if isinstance(author, dict) else None
        if not isinstance(name, str) or not name:
            raise _fail(ErrorKind.MISSING_AUTHOR_NAME, plugin, f"author #{index + 1} has no name")
        if not is_valid_url(author.get("home")):
            raise _fail(
                ErrorKind.INVALID_AUTHOR_HOMEPAGE,
                plugin,
                f"author '{name}' has an invalid homepage URL",
            )


def validate_repositories(plugin: dict[str, Any]) -> None:
    """Check every repository's type, URL and branch."""
    for index, repo in enumerate(plugin["repo"]):
        kind = repo.get("type") if isinstance(repo, dict) else None
        if not isinstance(kind, str) or kind not in REPOSITORY_KINDS:
            raise _fail(
                ErrorKind.INVALID_REPO_KIND,
                plugin,
                f"repository #{index + 1} has invalid type '{kind}'",
            )

        url = repo.get("url")
        if not is_valid_url(url):
            raise _fail(ErrorKind.INVALID_REPO_URL, plugin, f"repository #{index + 1} has an invalid URL")

        branch = repo.get("branch")
        if kind == RepositoryKind.NPM.value:
            if branch != "":
                raise RegistryError(
                    ErrorKind.UNEXPECTED_BRANCH,
                    _plugin_name(plugin),
                    "npm repository must have an empty branch",
                    repository_url=url,
                )
        elif not isinstance(branch, str) or not branch:
            raise RegistryError(
                ErrorKind.MISSING_BRANCH,
                _plugin_name(plugin),
                f"{kind} repository is missing a branch",
                repository_url=url,
            )


def validate_variant(plugin: dict[str, Any]) -> None:
    """Apply the checks specific to the plugin type."""
    variant = plugin.get("type")
    if variant == PluginType.APP.value:
        files = plugin.get("files")
        if not isinstance(files, list) or not files:
            raise _fail(ErrorKind.MISSING_FILES, plugin, "app plugin needs a non-empty 'files' list")
        for file_url in files:
            if not is_valid_url(file_url):
                raise _fail(ErrorKind.INVALID_FILE_URL, plugin, f"invalid file URL '{file_url}'")
    elif variant in (PluginType.NPM.value, PluginType.GIT.value):
        return
    else:
        raise _fail(ErrorKind.INVALID_VARIANT, plugin, f"invalid plugin type '{variant}'")


def validate_plugin(plugin: Any) -> None:
    """Run every local rule against a single plugin entry.

    Raises:
        RegistryError: For the first violated rule.
    """
    validate_base_fields(plugin)
    validate_authors(plugin)
    validate_repositories(plugin)
    validate_variant(plugin)
def validate_registry(
    plugins: list[Any],
    fetcher: Fetcher | None = None,
    on_plugin: Callable[[str], None] | None = None,
    on_repository: Callable[[PluginRecord, RepositoryInfo], None] | None = None,
) -> ValidationResult:
    """Validate a registry's plugin list.

    Duplicate names are checked first, then each plugin's local rules in
    declaration order. Remote repository checks run last, and only when
    a fetcher is given: every record must pass locally before the first
    fetch. So when record 1 has an unreachable repository and record 2
    breaks a local rule, record 2's local failure is the one reported.

    Args:
        plugins: Raw plugin entries from the registry file.
        fetcher: Enables remote cross-validation when provided.
        on_plugin: Optional callback invoked with each plugin name before
            its local checks.
        on_repository: Optional callback invoked before each repository
            is fetched.

    Returns:
        ValidationPassed with the typed records, or ValidationFailed with
        the first violation.
    """
    try:
        validate_unique_names(plugins)
        for plugin in plugins:
            if on_plugin is not None:
                on_plugin(_plugin_name(plugin) or UNKNOWN_PLUGIN)
            validate_plugin(plugin)

        records = RegistrySchema.model_validate({"plugins": plugins}).plugins

        if fetcher is not None:
            check_remote(records, fetcher, on_check=on_repository)
    except RegistryError as e:
        return ValidationFailed(error=e)

    return ValidationPassed(plugins=records)
