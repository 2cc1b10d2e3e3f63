from .base import Base
from .inquiry import Inquiry

__all__ = ["Base", "Inquiry"]
