from .selection import ViewerSelection, ViewerSession

__all__ = ["ViewerSelection", "ViewerSession"]
