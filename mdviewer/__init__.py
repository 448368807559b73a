"""Local browser viewer for a tree of markdown files."""

from .server import create_app

__version__ = "0.1.0"

__all__ = ["create_app", "__version__"]
