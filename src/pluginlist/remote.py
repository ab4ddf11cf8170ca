"""Remote cross-validation of plugin repositories.

Checks that every declared repository actually serves a package
descriptor with a name and a version. Network access goes through the
Fetcher protocol so local validation stays testable offline.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol
from urllib.error import HTTPError
from urllib.parse import quote, urlparse
from urllib.request import Request, urlopen

from pluginlist import __version__
from pluginlist.errors import ErrorKind, RegistryError
from pluginlist.registry_schema import PluginRecord, RepositoryInfo, RepositoryKind

# Descriptor file fetched from every source repository
DESCRIPTOR_FILE = "package.json"

GITHUB_RAW_HOST = "raw.githubusercontent.com"
NPM_REGISTRY_URL = "https://registry.npmjs.org"
NPM_PACKAGE_PREFIX = "/package/"

# Seconds before a fetch is abandoned
DEFAULT_FETCH_TIMEOUT = 10.0

USER_AGENT = f"pluginlist/{__version__}"


@dataclass
class FetchResponse:
    """Response of a single fetch."""

    status: int
    reason: str
    body: bytes

    @property
    def ok(self) -> bool:
        """Return True for 2xx statuses."""
        return 200 <= self.status < 300


class FetchTransportError(Exception):
    """Raised when a fetch fails before any HTTP response arrives."""

    def __init__(self, url: str, reason: str) -> None:
        """Initialize with the requested URL and the transport failure reason."""
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class Fetcher(Protocol):
    """Protocol for retrieving a URL."""

    def fetch(self, url: str) -> FetchResponse:
        """Fetch url and return its response.

        Raises FetchTransportError when no response could be obtained.
        """
        ...


class UrllibFetcher:
    """Fetches URLs with urllib and a bounded timeout."""

    def __init__(self, timeout: float = DEFAULT_FETCH_TIMEOUT) -> None:
        self._timeout = timeout

    def fetch(self, url: str) -> FetchResponse:
        """Fetch url; HTTP error statuses are returned, not raised."""
        request = Request(url, headers={"User-Agent": USER_AGENT, "Accept": "application/json"})
        try:
            with urlopen(request, timeout=self._timeout) as response:  # noqa: S310
                return FetchResponse(
                    status=response.status,
                    reason=response.reason,
                    body=response.read(),
                )
        except HTTPError as e:
            return FetchResponse(status=e.code, reason=str(e.reason), body=b"")
        except OSError as e:
            # URLError, TimeoutError and connection resets all land here
            reason = getattr(e, "reason", None) or e
            raise FetchTransportError(url, str(reason)) from e


def _base_url(url: str) -> str:
    """Strip a trailing slash and .git suffix from a repository URL."""
    return url.rstrip("/").removesuffix(".git")


def raw_manifest_url(repo: RepositoryInfo, file_path: str = DESCRIPTOR_FILE) -> str:
    """Build the raw-content URL of file_path on the repository's branch.

    Args:
        repo: A non-npm repository entry with a branch.
        file_path: Path of the file inside the repository.

    Returns:
        The URL serving the raw file contents.

    Raises:
        ValueError: If repo is an npm repository.
    """
    base = _base_url(repo.url)
    if repo.kind == RepositoryKind.GITHUB:
        parsed = urlparse(base)
        return parsed._replace(netloc=GITHUB_RAW_HOST).geturl() + f"/{repo.branch}/{file_path}"
    if repo.kind in (RepositoryKind.GITEE, RepositoryKind.GITLAB, RepositoryKind.GITCODE):
        return f"{base}/raw/{repo.branch}/{file_path}"

    msg = f"No raw file URL for repository type '{repo.kind.value}'"
    raise ValueError(msg)


def npm_package_name(repo: RepositoryInfo, plugin_name: str) -> str:
    """Resolve the npm package name for an npm repository entry.

    A ``https://www.npmjs.com/package/<pkg>`` URL names the package
    directly (scoped names included); any other URL falls back to the
    plugin name.
    """
    parsed = urlparse(_base_url(repo.url))
    if parsed.netloc.endswith("npmjs.com") and parsed.path.startswith(NPM_PACKAGE_PREFIX):
        name = parsed.path[len(NPM_PACKAGE_PREFIX):].strip("/")
        if name:
            return name
    return plugin_name


def npm_metadata_url(repo: RepositoryInfo, plugin_name: str) -> str:
    """Build the npm registry URL describing the latest published version."""
    package = npm_package_name(repo, plugin_name)
    return f"{NPM_REGISTRY_URL}/{quote(package, safe='@')}/latest"


def check_repository(plugin: PluginRecord, repo: RepositoryInfo, fetcher: Fetcher) -> None:
    """Verify one repository serves a descriptor with name and version.

    Args:
        plugin: The plugin that declares the repository.
        repo: The repository entry to check.
        fetcher: Used to retrieve the descriptor.

    Raises:
        RegistryError: On a branch rule violation, a failed fetch, or an
            incomplete descriptor. The error carries the plugin name and
            repository URL.
    """
    if repo.kind == RepositoryKind.NPM:
        if repo.branch != "":
            raise RegistryError(
                ErrorKind.UNEXPECTED_BRANCH,
                plugin.name,
                "npm repository must not set a branch",
                repository_url=repo.url,
            )
        url = npm_metadata_url(repo, plugin.name)
    else:
        if not repo.branch:
            raise RegistryError(
                ErrorKind.MISSING_BRANCH,
                plugin.name,
                f"{repo.kind.value} repository is missing a branch",
                repository_url=repo.url,
            )
        url = raw_manifest_url(repo)

    try:
        response = fetcher.fetch(url)
    except FetchTransportError as e:
        raise RegistryError(
            ErrorKind.REMOTE_FETCH_FAILED,
            plugin.name,
            f"cannot fetch {url}",
            repository_url=repo.url,
            reason=e.reason,
        ) from e

    if not response.ok:
        raise RegistryError(
            ErrorKind.REMOTE_FETCH_FAILED,
            plugin.name,
            f"cannot fetch {url}",
            repository_url=repo.url,
            reason=f"HTTP {response.status} {response.reason}".rstrip(),
        )

    try:
        descriptor = json.loads(response.body)
    except ValueError as e:
        raise RegistryError(
            ErrorKind.REMOTE_MANIFEST_INCOMPLETE,
            plugin.name,
            f"{DESCRIPTOR_FILE} is not valid JSON",
            repository_url=repo.url,
        ) from e

    if not isinstance(descriptor, dict):
        raise RegistryError(
            ErrorKind.REMOTE_MANIFEST_INCOMPLETE,
            plugin.name,
            f"{DESCRIPTOR_FILE} is not a JSON object",
            repository_url=repo.url,
        )

    for key in ("name", "version"):
        if not descriptor.get(key):
            raise RegistryError(
                ErrorKind.REMOTE_MANIFEST_INCOMPLETE,
                plugin.name,
                f"{DESCRIPTOR_FILE} is missing the '{key}' field",
                repository_url=repo.url,
            )


def check_remote(
    plugins: list[PluginRecord],
    fetcher: Fetcher,
    on_check: Callable[[PluginRecord, RepositoryInfo], None] | None = None,
) -> None:
    """Check every repository of every plugin, in declaration order.

    Stops at the first failure.

    Args:
        plugins: Records that already passed local validation.
        fetcher: Used to retrieve descriptors.
        on_check: Optional callback invoked before each repository is fetched.

    Raises:
        RegistryError: For the first failing repository.
    """
    for plugin in plugins:
        for repo in plugin.repositories:
            if on_check is not None:
                on_check(plugin, repo)
            check_repository(plugin, repo, fetcher)
