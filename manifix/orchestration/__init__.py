"""Orchestration module for manifix."""

from .pipeline import ManifestPipeline

__all__ = ["ManifestPipeline"]
