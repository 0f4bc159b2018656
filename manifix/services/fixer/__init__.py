"""Manifest fixer service."""

from .service import (
    ManifestFixerService,
    derive_fixer_args,
    included_in_mts,
    manifest_fixer_rule,
    target_sdk_version_for_fixer,
)

__all__ = [
    "ManifestFixerService",
    "derive_fixer_args",
    "included_in_mts",
    "manifest_fixer_rule",
    "target_sdk_version_for_fixer",
]
