"""
Property descriptors and the per-class descriptor store.

A FieldDescriptor declares one property of a backend's instances. Each class
owns one flattened, insertion-ordered mapping of field name to descriptor,
built when the class is declared by merging its own declarations over the
mapping of its parent class.
"""

import copy
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

PROPERTIES_ATTR = '__properties__'

JSON_TYPES = ('string', 'boolean', 'number', 'integer', 'array', 'object', 'null')

# Python member name -> JSON-Schema keyword
_JSON_KEYS = {'any_of': 'anyOf', 'one_of': 'oneOf'}
_PY_KEYS = {v: k for k, v in _JSON_KEYS.items()}

DescriptorLike = Union['FieldDescriptor', Mapping[str, Any]]


@dataclass
class FieldDescriptor:
    """
    Declared property of a backend.

    A descriptor is either simple-typed (``type`` set) or polymorphic
    (``any_of`` / ``one_of`` alternatives). Declaring both is accepted (and
    logged when the field is declared on a class); schema derivation keeps the
    alternatives and drops ``type``.

    Attributes:
        type: JSON type name, or a tuple of names for a union (e.g. ('string', 'array'))
        required: Whether the field must be set
        items: Element descriptor for array fields
        value: Declaration-time default value
        name: Display name (defaults to the field key in derived schemas)
        title: Label shown by forms
        description: Description of the field
        placeholder: Placeholder text for empty inputs
        hint: Help text shown below the input
        any_of: Alternatives, at least one must match
        one_of: Alternatives, exactly one must match
        extra: Further JSON-Schema keywords passed through unchanged (enum, minimum, ...)
    """
    type: Optional[Union[str, Tuple[str, ...]]] = None
    required: Optional[bool] = None
    items: Optional['FieldDescriptor'] = None
    value: Any = None
    name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    placeholder: Optional[str] = None
    hint: Optional[str] = None
    any_of: Optional[List['FieldDescriptor']] = None
    one_of: Optional[List['FieldDescriptor']] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.type, (list, tuple)):
            self.type = tuple(self.type)
        for type_name in self.types:
            if type_name not in JSON_TYPES:
                raise ValueError(f"Invalid type='{type_name}'. Allowed values: {list(JSON_TYPES)}")

        if self.items is not None:
            self.items = FieldDescriptor.from_dict(self.items)
        if self.any_of is not None:
            self.any_of = [FieldDescriptor.from_dict(alt) for alt in self.any_of]
        if self.one_of is not None:
            self.one_of = [FieldDescriptor.from_dict(alt) for alt in self.one_of]

    @classmethod
    def from_dict(cls, data: DescriptorLike) -> 'FieldDescriptor':
        """
        Build a descriptor from a plain mapping.

        Accepts JSON spelling ('anyOf', 'oneOf') as well as member names.
        Unknown keys are kept in ``extra``.
        """
        if isinstance(data, FieldDescriptor):
            return data
        if not isinstance(data, Mapping):
            raise TypeError(f"Field descriptor must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)} - {'extra'}
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = dict(data.get('extra') or {})
        for key, value in data.items():
            if key == 'extra':
                continue
            key = _PY_KEYS.get(key, key)
            if key in known:
                kwargs[key] = value
            else:
                extra[key] = value
        return cls(extra=extra, **kwargs)

    @property
    def types(self) -> Tuple[str, ...]:
        """Declared type names as a tuple (empty when untyped)."""
        if self.type is None:
            return ()
        if isinstance(self.type, tuple):
            return self.type
        return (self.type,)

    @property
    def is_polymorphic(self) -> bool:
        return self.any_of is not None or self.one_of is not None

    @property
    def is_required(self) -> bool:
        return bool(self.required)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to a new JSON-Schema-shaped dict.

        Unset members are omitted. Nested descriptors and values are copied,
        so the result never aliases the declaration.
        """
        result: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == 'extra':
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == 'type':
                value = list(value) if isinstance(value, tuple) else value
            elif f.name == 'items':
                value = value.to_dict()
            elif f.name in _JSON_KEYS:
                value = [alt.to_dict() for alt in value]
            else:
                value = copy.deepcopy(value)
            result[_JSON_KEYS.get(f.name, f.name)] = value

        for key, value in self.extra.items():
            result.setdefault(key, copy.deepcopy(value))
        return result


# ==================== Descriptor Store ====================

def normalize_properties(descriptors: Optional[Mapping[str, DescriptorLike]]) -> Dict[str, FieldDescriptor]:
    """Convert a mapping of plain dicts and descriptors to descriptors, keeping order."""
    if not descriptors:
        return {}
    result = {}
    for key, value in descriptors.items():
        descriptor = FieldDescriptor.from_dict(value)
        if descriptor.type is not None and descriptor.is_polymorphic:
            logger.warning(
                "Field '%s' declares both 'type' and anyOf/oneOf; 'type' is dropped from derived schemas",
                key,
                extra={'method': '[SCHEMA]'},
            )
        result[key] = descriptor
    return result


def merge_properties(base: Mapping[str, FieldDescriptor],
                     overrides: Optional[Mapping[str, DescriptorLike]]) -> Dict[str, FieldDescriptor]:
    """
    Merge override declarations over a base mapping.

    Overridden keys keep their base position and are replaced as a whole;
    new keys are appended in declaration order.
    """
    merged = dict(base)
    merged.update(normalize_properties(overrides))
    return merged


def _inherited_properties(target: type) -> Dict[str, FieldDescriptor]:
    for base in target.__mro__[1:]:
        if PROPERTIES_ATTR in vars(base):
            return vars(base)[PROPERTIES_ATTR]
    return {}


def define_properties(target: type,
                      descriptors: Optional[Mapping[str, DescriptorLike]],
                      recreate: bool = False) -> Dict[str, FieldDescriptor]:
    """
    Install or extend the declared properties of a class.

    Args:
        target: Class to declare properties on
        descriptors: Mapping of field name to FieldDescriptor or plain dict
        recreate: If True, discard the existing (or inherited) mapping first

    Returns:
        Copy of the installed, flattened mapping

    Note:
        Subclasses flatten their parent's mapping when they are declared;
        redefining a parent afterwards does not update existing subclasses.
    """
    if recreate:
        base: Mapping[str, FieldDescriptor] = {}
    elif PROPERTIES_ATTR in vars(target):
        base = vars(target)[PROPERTIES_ATTR]
    else:
        base = _inherited_properties(target)

    merged = merge_properties(base, descriptors)
    setattr(target, PROPERTIES_ATTR, merged)
    return dict(merged)


def get_properties(target: type) -> Dict[str, FieldDescriptor]:
    """Get the flattened property descriptors of a class (or of an instance's class)."""
    if not isinstance(target, type):
        target = type(target)
    return dict(vars(target).get(PROPERTIES_ATTR, {}))
