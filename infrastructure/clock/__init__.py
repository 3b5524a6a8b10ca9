from .system import SystemClock, UuidGenerator

__all__ = ["SystemClock", "UuidGenerator"]
