"""
Configuration management for manifix.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults. The build section mirrors the product configuration the
surrounding build system exposes (unbundled apps, platform codename, SDK finality).
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("true", "1")


def _env_list(name: str) -> list[str]:
    return os.environ.get(name, "").split()


class BuildConfig(BaseModel):
    """Product build configuration consumed by manifest preparation."""

    unbundled_build_apps: list[str] = Field(
        default_factory=list, description="Apps built in unbundled mode (TARGET_BUILD_APPS)"
    )
    unbundled_build: bool = Field(default=False, description="Whether this is an unbundled build")
    always_use_prebuilt_sdks: bool = Field(
        default=False, description="Build against prebuilt SDKs instead of source"
    )
    target_sdk_with_api_fingerprint: bool = Field(
        default=False,
        description="Substitute the API fingerprint into unbundled SDK versions",
    )
    platform_sdk_version: int = Field(default=34, ge=1, description="Platform SDK API level")
    platform_sdk_codename: str = Field(
        default="VanillaIceCream", description="Codename of the in-development platform SDK"
    )
    platform_sdk_final: bool = Field(
        default=False, description="Whether the platform SDK has been finalized"
    )
    platform_version_active_codenames: list[str] = Field(
        default_factory=lambda: ["VanillaIceCream"],
        description="Preview codenames accepted as SDK versions",
    )
    soong_out_dir: Path = Field(
        default=Path("out/soong"), description="Build system intermediates directory"
    )

    @property
    def use_api_fingerprint(self) -> bool:
        """Whether unreleased SDK versions are suffixed with the API fingerprint."""
        return (
            self.unbundled_build
            and not self.always_use_prebuilt_sdks
            and self.target_sdk_with_api_fingerprint
        )

    @property
    def api_fingerprint_path(self) -> Path:
        """File holding the fingerprint of the current unfinalized API surface."""
        return self.soong_out_dir / "api_fingerprint.txt"


class ToolsConfig(BaseModel):
    """External tools configuration."""

    manifest_fixer_cmd: str = Field(
        default="manifest_fixer", description="Manifest fixer executable"
    )
    manifest_merger_cmd: str = Field(
        default="manifest_merger", description="Manifest merger executable"
    )


class Config(BaseModel):
    """Root configuration for manifix."""

    project_name: str = Field(default="manifix", description="Project identifier")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    build: BuildConfig = Field(default_factory=BuildConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        build_defaults = BuildConfig()
        codename = os.environ.get("PLATFORM_SDK_CODENAME", build_defaults.platform_sdk_codename)
        return cls(
            log_level=os.environ.get("MANIFIX_LOG_LEVEL", "INFO"),  # type: ignore
            build=BuildConfig(
                unbundled_build_apps=_env_list("TARGET_BUILD_APPS"),
                unbundled_build=_env_flag("TARGET_BUILD_UNBUNDLED")
                or bool(_env_list("TARGET_BUILD_APPS")),
                always_use_prebuilt_sdks=_env_flag("ALWAYS_USE_PREBUILT_SDKS"),
                target_sdk_with_api_fingerprint=_env_flag(
                    "UNBUNDLED_BUILD_TARGET_SDK_WITH_API_FINGERPRINT"
                ),
                platform_sdk_version=int(
                    os.environ.get("PLATFORM_SDK_VERSION", build_defaults.platform_sdk_version)
                ),
                platform_sdk_codename=codename,
                platform_sdk_final=_env_flag("PLATFORM_SDK_FINAL"),
                platform_version_active_codenames=_env_list("PLATFORM_VERSION_ACTIVE_CODENAMES")
                or [codename],
                soong_out_dir=Path(os.environ.get("SOONG_OUT_DIR", "out/soong")),
            ),
            tools=ToolsConfig(
                manifest_fixer_cmd=os.environ.get("MANIFEST_FIXER_CMD", "manifest_fixer"),
                manifest_merger_cmd=os.environ.get("MANIFEST_MERGER_CMD", "manifest_merger"),
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
