"""
Numeric identity for projects, boards and todos.

Public API:
    - IdPool: gap-filling allocator for one id scope
    - get_id / set_id / remove_id: read and write `<!-- id: N -->` annotations
"""

from busymango.core.ids.annotations import get_id, remove_id, set_id
from busymango.core.ids.pool import IdPool

__all__ = [
    "IdPool",
    "get_id",
    "remove_id",
    "set_id",
]
