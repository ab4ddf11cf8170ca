"""Validation result types for pluginlist.

A validation run ends in exactly one of two states: every record passed
and the typed records are available, or the first violated rule is
reported as a single RegistryError.
"""

from dataclasses import dataclass, field

from pluginlist.errors import RegistryError
from pluginlist.registry_schema import PluginRecord


@dataclass
class ValidationPassed:
    """All records satisfied every rule."""

    plugins: list[PluginRecord] = field(default_factory=list)


@dataclass
class ValidationFailed:
    """Validation stopped at the first violated rule."""

    error: RegistryError


ValidationResult = ValidationPassed | ValidationFailed
