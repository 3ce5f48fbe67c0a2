"""
Property descriptors and schema derivation.

Backends declare their properties as FieldDescriptor mappings; the derive
functions turn a mapping into a JSON-Schema document and a UI-hint document.
"""

from .descriptors import (
    FieldDescriptor,
    define_properties,
    get_properties,
    merge_properties,
    normalize_properties,
)
from .derive import capitalize, to_json_schema, to_ui_schema

__all__ = [
    'FieldDescriptor',
    'define_properties',
    'get_properties',
    'merge_properties',
    'normalize_properties',
    'capitalize',
    'to_json_schema',
    'to_ui_schema',
]
