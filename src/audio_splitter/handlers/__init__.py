"""Handlers layer exports."""

from .split_pipeline import SplitPipeline

__all__ = ["SplitPipeline"]
