"""Services package for manifix."""

from .fixer import ManifestFixerService
from .merger import ManifestMergerService

__all__ = [
    "ManifestFixerService",
    "ManifestMergerService",
]
