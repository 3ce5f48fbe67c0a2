"""
Derivation of validation and UI schemas from property descriptors.

Both functions are pure: they read the descriptor mapping and return new
documents without touching the declarations.
"""

from typing import Any, Dict, List, Mapping, Optional

from .descriptors import DescriptorLike, FieldDescriptor

ARRAY_TITLE_SUFFIX = ' List'


def capitalize(s: Optional[str]) -> Optional[str]:
    """Uppercase the first character only; empty or None is returned unchanged."""
    if s:
        s = s[0].upper() + s[1:]
    return s


def _as_dict(descriptor: DescriptorLike) -> Dict[str, Any]:
    return FieldDescriptor.from_dict(descriptor).to_dict()


def _update_array_title(prop: Dict[str, Any], *names: Optional[str]) -> None:
    """Give an untitled array property the title '<Name> List'."""
    if prop.get('type') != 'array' or prop.get('title'):
        return
    for name in names:
        if name:
            prop['title'] = capitalize(name) + ARRAY_TITLE_SUFFIX
            return


def _update_alternatives(alternatives: Any, owner_name: Optional[str]) -> None:
    if not isinstance(alternatives, list):
        return
    for alt in alternatives:
        if isinstance(alt, dict):
            _update_array_title(alt, alt.get('name'), owner_name)


def to_json_schema(descriptors: Mapping[str, DescriptorLike],
                   title: Optional[str] = None,
                   description: Optional[str] = None) -> Dict[str, Any]:
    """
    Convert a property descriptor mapping to a JSON-Schema object document.

    Args:
        descriptors: Mapping of field name to FieldDescriptor or plain dict
        title: Document title
        description: Document description, omitted when empty

    Returns:
        {'required': [...], 'properties': {...}, 'type': 'object', 'title': ..., 'description': ...}

    Example:
        >>> to_json_schema({'price': {'type': 'number', 'required': True}}, title='Shop')
        {'required': ['price'], 'properties': {'price': {'type': 'number', 'required': True, 'name': 'price'}}, 'title': 'Shop', 'type': 'object'}
    """
    required: List[str] = []
    properties: Dict[str, Any] = {}

    for key, descriptor in descriptors.items():
        prop = _as_dict(descriptor)
        if prop.get('required') and key not in required:
            required.append(key)

        if prop.get('name') is None:
            prop['name'] = key
        if prop.get('value') is not None:
            prop['default'] = prop['value']

        _update_array_title(prop, prop['name'])
        _update_alternatives(prop.get('anyOf'), prop['name'])
        _update_alternatives(prop.get('oneOf'), prop['name'])
        if 'anyOf' in prop or 'oneOf' in prop:
            prop.pop('type', None)

        properties[key] = prop

    result: Dict[str, Any] = {'required': required, 'properties': properties}
    if title is not None:
        result['title'] = title
    result['type'] = 'object'
    if description:
        result['description'] = description
    return result


def to_ui_schema(descriptors: Mapping[str, DescriptorLike]) -> Dict[str, Dict[str, Any]]:
    """
    Convert a property descriptor mapping to a UI-hint document.

    Each field maps to 'ui:title', 'ui:description', 'ui:placeholder' and
    'ui:help'. The placeholder falls back to the description and the title to
    the field name.
    """
    result: Dict[str, Dict[str, Any]] = {}
    for key, descriptor in descriptors.items():
        prop = FieldDescriptor.from_dict(descriptor)
        result[key] = {
            'ui:title': prop.title or key,
            'ui:description': prop.description,
            'ui:placeholder': prop.placeholder or prop.description,
            'ui:help': prop.hint,
        }
    return result
