"""
Snapshot Pipeline

Loading snapshots for the CLI and debounced recomputation for live callers.
"""

from konterra_insights.pipeline.ingest import load_snapshot
from konterra_insights.pipeline.recompute import DebouncedRecompute

__all__ = [
    "load_snapshot",
    "DebouncedRecompute",
]
