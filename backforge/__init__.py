"""
BackForge - hierarchical backend registry with declarative property schemas.
"""

__version__ = '1.0.0'

from .errors import UnresolvableTypeError
from .backends import BREAK, Backend, BackendRegistry, default_registry
from .schema import FieldDescriptor, to_json_schema, to_ui_schema

__all__ = [
    '__version__',
    'BREAK',
    'Backend',
    'BackendRegistry',
    'FieldDescriptor',
    'UnresolvableTypeError',
    'default_registry',
    'to_json_schema',
    'to_ui_schema',
]
