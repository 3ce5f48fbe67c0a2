"""
Automatic backend discovery.

This module registers the backend classes found in a package based on
naming conventions, so plugin packages need no manual registration calls.

Naming Convention:
- Module: <backend_name>.py (e.g., redis.py, memory.py)
- Class: Must end with 'Backend' (e.g., RedisCacheBackend)
- Intermediate directory classes live in base.py, which is not scanned

A discovered class whose direct base is a registered directory is
registered under that directory, otherwise under the given parent.

Example:
    >>> from backforge.backends import default_registry
    >>> auto_register_backends(default_registry, 'mypackage.backends')
    3
"""

import importlib
import inspect
import pkgutil
from types import ModuleType
from typing import List, Optional, Tuple, Union

from .registry import BackendRegistry, NameOrClass


SKIPPED_MODULES = ('__init__', 'base')


def auto_register_backends(registry: BackendRegistry,
                           package: Union[str, ModuleType],
                           parent: Optional[NameOrClass] = None) -> int:
    """
    Auto-discover and register backends in a package.

    Classes already registered (e.g. by the package itself at import time)
    are left untouched.

    Args:
        registry: Registry to register into
        package: Package (or module) object or dotted name
        parent: Default directory for discovered classes (default root)

    Returns:
        Number of backends successfully registered
    """
    method = '[DISCOVER]'
    if isinstance(package, str):
        package = importlib.import_module(package)

    modules = [package]
    if hasattr(package, '__path__'):
        for info in sorted(pkgutil.iter_modules(package.__path__), key=lambda m: m.name):
            if info.name in SKIPPED_MODULES or info.name.startswith('_'):
                continue
            module_name = f"{package.__name__}.{info.name}"
            try:
                modules.append(importlib.import_module(module_name))
            except Exception as e:
                registry.log(f"Failed to import {module_name}: {e}", level='ERROR', method=method)

    registered_count = 0
    root_class = registry.root.backend_class

    for module in modules:
        for backend_class in _find_backend_classes(module, root_class):
            if backend_class in registry:
                continue

            is_valid, error = validate_backend_metadata(backend_class)
            if not is_valid:
                registry.log(f"Skipping {backend_class.__name__}: {error}", level='WARNING', method=method)
                continue

            base = backend_class.__bases__[0]
            base_node = registry.get_node(base)
            target = base if base_node is not None and base_node.is_dir else parent

            if registry.register_item(backend_class, parent=target):
                registered_count += 1
                desc = backend_class.description
                desc_str = f" - {desc}" if desc else ""
                registry.log(f"✓ Discovered: {module.__name__} → {backend_class.__name__}{desc_str}", level='DEBUG', method=method)

    level = 'INFO' if registered_count else 'DEBUG'
    registry.log(f"Registered {registered_count} backend(s) from {package.__name__}", level=level, method=method)
    return registered_count


def _find_backend_classes(module: ModuleType, root_class: type) -> List[type]:
    """
    Find backend classes in module.

    Looks for classes that:
    - End with 'Backend'
    - Are defined in the module (not imported)
    - Inherit from the registry root class
    - Are not the root class itself
    """
    found = []
    for name, obj in inspect.getmembers(module, inspect.isclass):
        if (name.endswith('Backend') and
                obj.__module__ == module.__name__ and
                issubclass(obj, root_class) and
                obj is not root_class):
            found.append(obj)
    return found


def validate_backend_metadata(backend_class: type) -> Tuple[bool, Optional[str]]:
    """
    Validate that a backend class has proper metadata.

    Checks for:
    - title and description strings
    - __alias__ is a string or a list of strings

    Args:
        backend_class: Backend class to validate

    Returns:
        (is_valid, error_message) tuple
    """
    name = backend_class.__name__

    if not isinstance(getattr(backend_class, 'title', ''), str):
        return False, f"{name}.title must be a string"

    if not isinstance(getattr(backend_class, 'description', ''), str):
        return False, f"{name}.description must be a string"

    alias = vars(backend_class).get('__alias__')
    if alias is not None and not isinstance(alias, str):
        if not isinstance(alias, (list, tuple)) or not all(isinstance(a, str) for a in alias):
            return False, f"{name}.__alias__ must be a string or a list of strings"

    return True, None
