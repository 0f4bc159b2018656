"""Manifest merger service."""

from .service import ManifestMergerService, manifest_merger_rule, merger_args

__all__ = ["ManifestMergerService", "manifest_merger_rule", "merger_args"]
