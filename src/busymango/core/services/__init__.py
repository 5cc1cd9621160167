"""
Service layer shared by every busymango interface.
"""

from busymango.core.services.workspace import Workspace, resolve_root

__all__ = ["Workspace", "resolve_root"]
