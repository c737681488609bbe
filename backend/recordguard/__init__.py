"""recordguard — declarative record validation."""

__version__ = "1.0.0"
