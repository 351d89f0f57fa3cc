"""Image engine implementations, one per codec library."""

from .pillow_engine import PillowImageEngine, PillowImageHandle

__all__ = ["PillowImageEngine", "PillowImageHandle"]
