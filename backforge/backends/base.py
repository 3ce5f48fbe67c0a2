"""
Base class for all backend implementations.

Backends declare their instance properties in a ``properties`` mapping in
the class body. The mapping is merged over the parent's declarations when
the subclass is created, and drives instance initialization as well as the
derived JSON and UI schemas.
"""

import copy
from typing import Any, Dict, List, Mapping, Optional

from ..events import EventEmitter
from ..schema.derive import to_json_schema, to_ui_schema
from ..schema.descriptors import DescriptorLike, FieldDescriptor, define_properties, get_properties
from .registry import format_name_from_class


BACKEND_PROPERTIES = {
    'name': FieldDescriptor(
        type='string',
        required=True,
        description='the unique name of the backend',
    ),
    'enabled': FieldDescriptor(
        type='boolean',
        value=True,
        description='enable the backend or not',
    ),
    'icon': FieldDescriptor(
        type='string',
        description='the icon name of the backend',
    ),
    'display_name': FieldDescriptor(
        type='string',
        description='the backend display name',
    ),
    'alias': FieldDescriptor(
        type=('string', 'array'),
        items=FieldDescriptor(type='string'),
        description='another unique name of the backend',
    ),
    'description': FieldDescriptor(
        type='string',
        description='the optional description of the backend',
    ),
}


class Backend(EventEmitter):
    """
    Base class for all backend implementations.

    Class Attributes (override in subclasses):
        __backend_name__ (str): Declared name, formatted from the class name when unset
        __alias__ (str | list): Additional registered names
        __base_name_only__ (int): Ancestor names stripped when formatting the name
        title (str): Schema title
        description (str): Schema description
        enabled (bool): Whether this backend is available
        properties (dict): Property declarations added to the inherited ones
    """

    __backend_name__: Optional[str] = None
    __alias__ = None
    __base_name_only__: Optional[int] = None

    title: str = ''
    description: str = ''
    enabled: bool = True

    _name: Optional[str] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        define_properties(cls, vars(cls).get('properties'))

    def __init__(self, args: Optional[Mapping[str, Any]] = None, logger: Optional[Any] = None):
        """
        Initialize backend properties.

        Args:
            args: Property values; missing properties take their declared default
            logger: RegistryLogger for logging (None for silent)
        """
        super().__init__()
        self.logger = logger
        self.initialize(dict(args or {}))
        if self.enabled is None:
            self.enabled = True

    def initialize(self, args: Dict[str, Any]) -> None:
        """Assign every declared property from args, else from its declared value."""
        properties = get_properties(self)
        for key, descriptor in properties.items():
            if key in args:
                value = args[key]
            else:
                value = copy.deepcopy(descriptor.value)
            setattr(self, key, value)

        unknown = [key for key in args if key not in properties]
        if unknown:
            self.log(f"Ignoring undeclared properties: {', '.join(unknown)}", level='DEBUG')

    @property
    def name(self) -> str:
        """Instance name, falling back to the registered class name."""
        return self._name or type(self).canonical_name()

    @name.setter
    def name(self, value: Optional[str]) -> None:
        if value:
            self._name = value

    @property
    def method(self) -> str:
        """Logging tag, e.g. '[REDIS]'."""
        return f"[{type(self).canonical_name().upper()}]"

    def to_dict(self) -> Dict[str, Any]:
        """Get the declared property values that are set."""
        result = {}
        for key in get_properties(self):
            value = getattr(self, key, None)
            if value is not None:
                result[key] = value
        return result

    def missing_required(self) -> List[str]:
        """Get the required properties that are still unset."""
        return [
            key for key, descriptor in get_properties(self).items()
            if descriptor.is_required and getattr(self, key, None) is None
        ]

    def log(self, message: str, level: str = 'INFO') -> None:
        if self.logger:
            self.logger.log(level.lower(), self.method, message)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} enabled={self.enabled!r}>"

    # ==================== Class Metadata ====================

    @classmethod
    def canonical_name(cls) -> str:
        """Declared ``__backend_name__`` of the class, else the name formatted from the class name."""
        explicit = vars(cls).get('__backend_name__')
        if explicit:
            return explicit
        base_name_only = cls.__base_name_only__
        return format_name_from_class(cls, 1 if base_name_only is None else base_name_only)

    @classmethod
    def get_properties(cls) -> Dict[str, FieldDescriptor]:
        """Get the flattened property descriptors of this class."""
        return get_properties(cls)

    @classmethod
    def define_properties(cls, descriptors: Mapping[str, DescriptorLike],
                          recreate: bool = False) -> Dict[str, FieldDescriptor]:
        """Extend (or with recreate, replace) the property descriptors of this class."""
        return define_properties(cls, descriptors, recreate)

    @classmethod
    def to_json_schema(cls) -> Dict[str, Any]:
        """
        Derive the JSON-Schema document of this class' properties.

        Titled by the canonical name; use BackendRegistry.to_json_schema() for
        a document titled by the name a registry uses.
        """
        return to_json_schema(
            cls.get_properties(),
            title=cls.title or cls.canonical_name(),
            description=cls.description,
        )

    @classmethod
    def to_ui_schema(cls) -> Dict[str, Dict[str, Any]]:
        """Derive the UI-hint document of this class' properties."""
        return to_ui_schema(cls.get_properties())


define_properties(Backend, BACKEND_PROPERTIES)
