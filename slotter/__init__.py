"""Framework-independent HTTP handlers, auth middleware and request-context helpers for a warehouse management backend."""

__version__ = "0.1.0"