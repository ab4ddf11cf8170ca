"""Community plugin registry validation tools."""

__version__ = "0.1.0"
