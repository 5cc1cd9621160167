"""
Project library: loading, id reconciliation and queries.
"""

from busymango.core.library.library import (
    Library,
    ProjectDocument,
    ReconcileReport,
    fill_missing_ids,
)

__all__ = [
    "Library",
    "ProjectDocument",
    "ReconcileReport",
    "fill_missing_ids",
]
