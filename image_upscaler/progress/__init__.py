"""Console progress and message output."""

from .tracker import BatchProgressContext, ProgressTracker

__all__ = ["BatchProgressContext", "ProgressTracker"]
