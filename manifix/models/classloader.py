"""
Class loader context models.

A class loader context records the shared libraries an app loads at runtime.
Libraries declared by the module author are explicit; libraries the build
system infers from dependencies are implicit. Only implicit libraries are
injected into the manifest by the fixer.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from ..core.exceptions import ValidationError

# Key for libraries that apply regardless of the target SDK. Keys >= 0 hold
# compatibility libraries added for apps targeting older SDKs.
ANY_SDK_VERSION = -1


class ClassLoaderContext(BaseModel):
    """A single shared library in the class loader hierarchy."""

    name: str = Field(description="Library name as it appears in <uses-library>")
    host_path: Path | None = Field(default=None, description="Build-time path to the library jar")
    implicit: bool = Field(default=False, description="Inferred by the build system")
    optional: bool = Field(default=False, description="Optional at runtime")


class ClassLoaderContextMap(BaseModel):
    """Class loader contexts keyed by SDK version."""

    contexts: dict[int, list[ClassLoaderContext]] = Field(default_factory=dict)

    def add_context(
        self,
        sdk_version: int,
        name: str,
        host_path: Path | None = None,
        *,
        implicit: bool = False,
        optional: bool = False,
    ) -> ClassLoaderContext:
        """Add a library under an SDK version key.

        Raises:
            ValidationError: If the name is empty or already present under the key.
        """
        if not name:
            raise ValidationError(message="library name must not be empty", field_name="name")
        entries = self.contexts.setdefault(sdk_version, [])
        if any(entry.name == name for entry in entries):
            raise ValidationError(
                message=f"library {name!r} added twice for sdk version {sdk_version}",
                field_name="name",
                actual_value=name,
            )
        clc = ClassLoaderContext(
            name=name, host_path=host_path, implicit=implicit, optional=optional
        )
        entries.append(clc)
        return clc

    def _partition(self, implicit: bool) -> tuple[list[str], list[str]]:
        required: list[str] = []
        optional: list[str] = []
        for clc in self.contexts.get(ANY_SDK_VERSION, []):
            if clc.implicit != implicit:
                continue
            (optional if clc.optional else required).append(clc.name)
        return required, optional

    def implicit_uses_libs(self) -> tuple[list[str], list[str]]:
        """Required and optional names of libraries inferred by the build system."""
        return self._partition(implicit=True)

    def explicit_uses_libs(self) -> tuple[list[str], list[str]]:
        """Required and optional names of libraries declared by the module author."""
        return self._partition(implicit=False)

    def uses_libs(self) -> list[str]:
        return [clc.name for clc in self.contexts.get(ANY_SDK_VERSION, [])]
