"""
Module context passed to manifest preparation.

The context carries the module's identity, the build configuration and the
optional capabilities a module type may offer. It is immutable so derivations
over it stay pure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import NoReturn, Protocol, runtime_checkable

from ..core.config import Config
from ..core.exceptions import ConfigurationError

# Resource module of the platform itself; it defines the SDK and is never
# fingerprinted.
FRAMEWORK_RES_MODULE = "framework-res"


@runtime_checkable
class SuiteMembership(Protocol):
    """Capability of test modules that are packaged into test suites."""

    def included_in_test_suite(self, suite: str) -> bool: ...


@dataclass(frozen=True)
class DeclaredSuites:
    """Test suite membership backed by the suites listed on the module."""

    suites: tuple[str, ...] = ()

    def included_in_test_suite(self, suite: str) -> bool:
        return suite in self.suites


@dataclass(frozen=True)
class ModuleContext:
    """Identity and environment of the module being built."""

    name: str
    config: Config
    out_dir: Path = Path("out/soong/.intermediates")
    test_suites: SuiteMembership | None = field(default=None)

    def path_for_module_out(self, *parts: str) -> Path:
        """Path under this module's private output directory."""
        return self.out_dir.joinpath(self.name, *parts)

    def module_error(self, message: str, property_name: str = "", cause: Exception | None = None) -> NoReturn:
        """Report a fatal configuration error for this module.

        Raises:
            ConfigurationError: Always.
        """
        raise ConfigurationError(
            message=message,
            module_name=self.name,
            property_name=property_name,
            cause=cause,
        )
