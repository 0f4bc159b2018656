"""
Inputs and outputs of the manifest fixer derivation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.types import ArgList
from .classloader import ClassLoaderContextMap
from .sdk import SdkContext


@dataclass(frozen=True)
class ManifestFixerParams:
    """Module properties that shape the manifest fixer invocation.

    ``use_embedded_native_libs`` only has an effect for apps; libraries are
    marked with ``--library`` and the fixer leaves native lib extraction alone.
    """

    sdk_context: SdkContext | None = None
    class_loader_contexts: ClassLoaderContextMap | None = None
    is_library: bool = False
    use_embedded_native_libs: bool = False
    uses_non_sdk_apis: bool = False
    use_embedded_dex: bool = False
    has_no_code: bool = False
    test_only: bool = False
    logging_parent: str = ""


@dataclass(frozen=True)
class FixerArgs:
    """Ordered fixer arguments plus the files they read at build time."""

    args: ArgList = ()
    deps: tuple[Path, ...] = ()

    def joined(self) -> str:
        return " ".join(self.args)
