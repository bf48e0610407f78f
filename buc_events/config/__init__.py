"""Configuration package initialization."""

from .environment import IS_PRODUCTION_ENVIRONMENT
from .settings import StoreConfig, AdminConfig, DateConfig

__all__ = ['IS_PRODUCTION_ENVIRONMENT', 'StoreConfig', 'AdminConfig', 'DateConfig']
