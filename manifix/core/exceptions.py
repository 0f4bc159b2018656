"""
Custom exception hierarchy for manifix.

All exceptions inherit from ManifixError to enable consistent error handling
across the preparation stage. Each exception type includes context for debugging and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ManifixError(Exception):
    """Base exception for all manifix errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ValidationError(ManifixError):
    """Raised when input validation fails."""

    field_name: str | None = None
    expected_type: str | None = None
    actual_value: Any = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"Validation failed for '{self.field_name}': {base}"
        return f"Validation failed: {base}"


@dataclass
class SdkVersionError(ValidationError):
    """Raised when an SDK version string cannot be resolved."""

    def __str__(self) -> str:
        return f"unable to resolve sdk version {self.actual_value!r}: {self.message}"


@dataclass
class ConfigurationError(ManifixError):
    """Raised when a module's configuration cannot be turned into a build step.

    This is fatal for the module's build: the error is reported to the caller
    and no graph node is registered for the module.
    """

    module_name: str = ""
    property_name: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"module {self.module_name!r}: {base}"


@dataclass
class GraphError(ManifixError):
    """Raised when a build node cannot be registered with the graph."""

    output: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"[graph: {self.output}] {base}"
