"""HTTP API package."""

from .app import app, create_application

__all__ = ['app', 'create_application']
