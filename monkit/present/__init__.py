"""Text, JSON and WSGI renderings of a registry's statistics."""

__version__ = "3.0.0"