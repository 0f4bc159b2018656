"""
SDK version models.

A module declares its SDK constraints as strings (``"current"``, ``"28"``,
``"system_31"``, a preview codename). These models parse those strings into API
levels and resolve them against the product build configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from ..core.exceptions import SdkVersionError

if TYPE_CHECKING:
    from .module import ModuleContext

# Minimum API level that can load native libraries straight out of the APK.
MIN_EMBEDDED_NATIVE_LIBS_API = 23

_SDK_KINDS = ("system_server", "core_platform", "system", "test", "core", "module", "public")


@dataclass(frozen=True)
class ApiLevel:
    """A resolved API level."""

    value: str
    number: int
    is_preview: bool = False

    def final_or_future_int(self) -> int:
        """Integer form, with every preview level mapped to the future sentinel."""
        return self.number

    def __str__(self) -> str:
        return self.value


FUTURE_API_LEVEL = ApiLevel("current", 10000, is_preview=True)


def api_level_from_int(number: int) -> ApiLevel:
    return ApiLevel(str(number), number)


@dataclass(frozen=True)
class SdkSpec:
    """A parsed SDK version declaration."""

    raw: str
    kind: str
    version: str
    api_level: ApiLevel

    @classmethod
    def parse(cls, raw: str) -> SdkSpec:
        """Parse a declared SDK version string.

        Parsing never fails; strings that do not name a known level are kept
        as preview candidates and rejected when resolved.
        """
        text = raw.strip()
        kind, version = "public", text or "current"
        for candidate in _SDK_KINDS:
            prefix = candidate + "_"
            if text.startswith(prefix):
                kind, version = candidate, text[len(prefix):]
                break

        if version == "current":
            level = FUTURE_API_LEVEL
        elif version.isdigit():
            level = api_level_from_int(int(version))
        else:
            level = ApiLevel(version, FUTURE_API_LEVEL.number, is_preview=True)
        return cls(raw=raw, kind=kind, version=version, api_level=level)

    def effective_version(self, ctx: ModuleContext) -> ApiLevel:
        """Resolve to the API level the module is built against.

        Raises:
            SdkVersionError: If the version is not a valid level for this build.
        """
        build = ctx.config.build
        level = self.api_level
        if not level.is_preview:
            if level.number < 1:
                raise SdkVersionError(
                    message="api level must be positive",
                    field_name="sdk_version",
                    actual_value=self.raw,
                )
            return level
        if self.version == "current":
            if build.platform_sdk_final:
                return api_level_from_int(build.platform_sdk_version)
            return FUTURE_API_LEVEL
        if self.version in build.platform_version_active_codenames:
            return FUTURE_API_LEVEL
        raise SdkVersionError(
            message=(
                "not a number or an active codename "
                f"(active: {', '.join(build.platform_version_active_codenames) or 'none'})"
            ),
            field_name="sdk_version",
            actual_value=self.raw,
        )

    def effective_version_string(self, ctx: ModuleContext) -> str:
        """Resolve to the version string written into the manifest.

        Raises:
            SdkVersionError: If the version is not a valid level for this build.
        """
        level = self.effective_version(ctx)
        if not level.is_preview:
            return level.value
        if self.version == "current":
            return ctx.config.build.platform_sdk_codename
        return self.version


@runtime_checkable
class SdkContext(Protocol):
    """SDK constraints of a module, as supplied by the module type."""

    def min_sdk_version(self, ctx: ModuleContext) -> SdkSpec: ...

    def target_sdk_version(self, ctx: ModuleContext) -> SdkSpec: ...


class ModuleSdkContext(BaseModel):
    """SDK constraints declared on a module definition.

    ``min_sdk`` and ``target_sdk`` default to ``sdk_version`` when unset.
    """

    sdk_version: str = Field(default="", description="SDK the module compiles against")
    min_sdk: str | None = Field(default=None, description="Declared min_sdk_version")
    target_sdk: str | None = Field(default=None, description="Declared target_sdk_version")

    model_config = {"frozen": True}

    def sdk_spec(self) -> SdkSpec:
        return SdkSpec.parse(self.sdk_version)

    def min_sdk_version(self, ctx: ModuleContext) -> SdkSpec:
        if self.min_sdk is not None:
            return SdkSpec.parse(self.min_sdk)
        return self.sdk_spec()

    def target_sdk_version(self, ctx: ModuleContext) -> SdkSpec:
        if self.target_sdk is not None:
            return SdkSpec.parse(self.target_sdk)
        return self.sdk_spec()
