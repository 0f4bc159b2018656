"""Data models for manifix."""

from .classloader import ANY_SDK_VERSION, ClassLoaderContext, ClassLoaderContextMap
from .description import ModuleDescription, UsesLibrary
from .module import (
    FRAMEWORK_RES_MODULE,
    DeclaredSuites,
    ModuleContext,
    SuiteMembership,
)
from .params import FixerArgs, ManifestFixerParams
from .sdk import (
    FUTURE_API_LEVEL,
    MIN_EMBEDDED_NATIVE_LIBS_API,
    ApiLevel,
    ModuleSdkContext,
    SdkContext,
    SdkSpec,
)

__all__ = [
    "ANY_SDK_VERSION",
    "ClassLoaderContext",
    "ClassLoaderContextMap",
    "ModuleDescription",
    "UsesLibrary",
    "FRAMEWORK_RES_MODULE",
    "DeclaredSuites",
    "ModuleContext",
    "SuiteMembership",
    "FixerArgs",
    "ManifestFixerParams",
    "FUTURE_API_LEVEL",
    "MIN_EMBEDDED_NATIVE_LIBS_API",
    "ApiLevel",
    "ModuleSdkContext",
    "SdkContext",
    "SdkSpec",
]
