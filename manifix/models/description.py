"""
JSON description of a module for command-line use.

The build system normally hands the preparation services live objects. This
model lets the same inputs be written down in a file, e.g.::

    {
      "name": "Settings",
      "manifest": "packages/apps/Settings/AndroidManifest.xml",
      "sdk": {"sdk_version": "system_current", "min_sdk": "24"},
      "uses_libs": [{"name": "org.apache.http.legacy", "implicit": true}],
      "static_lib_manifests": ["out/lib/AndroidManifest.xml"]
    }
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from ..core.config import Config
from .classloader import ANY_SDK_VERSION, ClassLoaderContextMap
from .module import DeclaredSuites, ModuleContext
from .params import ManifestFixerParams
from .sdk import ModuleSdkContext


class UsesLibrary(BaseModel):
    """A shared library the module loads at runtime."""

    name: str
    optional: bool = Field(default=False)
    implicit: bool = Field(default=False, description="Inferred from a dependency")
    host_path: Path | None = Field(default=None)


class ModuleDescription(BaseModel):
    """Everything manifest preparation needs to know about one module."""

    name: str = Field(description="Module name")
    manifest: Path = Field(description="Unprocessed AndroidManifest.xml")
    sdk: ModuleSdkContext | None = Field(default=None, description="SDK constraints")
    uses_libs: list[UsesLibrary] | None = Field(default=None)
    is_library: bool = Field(default=False)
    use_embedded_native_libs: bool = Field(default=False)
    uses_non_sdk_apis: bool = Field(default=False)
    use_embedded_dex: bool = Field(default=False)
    has_no_code: bool = Field(default=False)
    test_only: bool = Field(default=False)
    logging_parent: str = Field(default="")
    static_lib_manifests: list[Path] = Field(default_factory=list)
    test_suites: list[str] | None = Field(
        default=None, description="Suites a test module is packaged into"
    )

    def class_loader_contexts(self) -> ClassLoaderContextMap | None:
        if self.uses_libs is None:
            return None
        clc_map = ClassLoaderContextMap()
        for lib in self.uses_libs:
            clc_map.add_context(
                ANY_SDK_VERSION,
                lib.name,
                lib.host_path,
                implicit=lib.implicit,
                optional=lib.optional,
            )
        return clc_map

    def to_params(self) -> ManifestFixerParams:
        return ManifestFixerParams(
            sdk_context=self.sdk,
            class_loader_contexts=self.class_loader_contexts(),
            is_library=self.is_library,
            use_embedded_native_libs=self.use_embedded_native_libs,
            uses_non_sdk_apis=self.uses_non_sdk_apis,
            use_embedded_dex=self.use_embedded_dex,
            has_no_code=self.has_no_code,
            test_only=self.test_only,
            logging_parent=self.logging_parent,
        )

    def to_context(self, config: Config, out_dir: Path) -> ModuleContext:
        suites = DeclaredSuites(tuple(self.test_suites)) if self.test_suites is not None else None
        return ModuleContext(name=self.name, config=config, out_dir=out_dir, test_suites=suites)
