"""
Backend system for pluggable implementations.

This package provides a hierarchical registry of backend classes, the
Backend base class with its declarative property schema, and automatic
discovery of backends in plugin packages.

``default_registry`` is the registry rooted at Backend used by the CLI.
Libraries and tests may create their own BackendRegistry instead.
"""

from .registry import BREAK, BackendRegistry, RegistryNode, format_name_from_class
from .base import BACKEND_PROPERTIES, Backend
from .discovery import auto_register_backends, validate_backend_metadata

default_registry = BackendRegistry(Backend)

__all__ = [
    'BREAK',
    'BACKEND_PROPERTIES',
    'Backend',
    'BackendRegistry',
    'RegistryNode',
    'auto_register_backends',
    'default_registry',
    'format_name_from_class',
    'validate_backend_metadata',
]
