"""
Hierarchical backend registry.

This module provides a tree of backend classes. Directory nodes hold further
registrations (sub-registries), item nodes are terminal implementations.
Every node is found by its canonical name or one of its aliases, and the
registry creates instances of the resolved class on request.

Registration conflicts and lookup misses are ordinary outcomes and are
reported as False / None. Only create() raises, when the requested type can
not be resolved.
"""

from collections import deque
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Type, Union

from ..configuration.logger import RegistryLogger
from ..configuration.params import RegistryParams
from ..errors import UnresolvableTypeError
from ..schema.derive import to_json_schema, to_ui_schema
from ..schema.descriptors import get_properties


class _Break:
    """Sentinel returned from a for_each callback to stop iteration."""

    def __repr__(self) -> str:
        return 'BREAK'


BREAK = _Break()

PATH_SEPARATOR = '/'

NameOrClass = Union[str, type]


def format_name_from_class(backend_class: type, base_name_only: int = 1) -> str:
    """
    Format the name to register for a class.

    Starting from the class name, the name of each of up to ``base_name_only``
    ancestors (walking the first base upwards) is removed when it is a proper
    suffix of the result.

    Args:
        backend_class: Class to name
        base_name_only: Number of ancestor names to try stripping (0 disables)

    Returns:
        The name to register

    Example:
        >>> class CacheBackend(Backend): ...
        >>> class RedisCacheBackend(CacheBackend): ...
        >>> format_name_from_class(RedisCacheBackend)
        'Redis'
    """
    result = backend_class.__name__
    if not result:
        raise TypeError('the class has no name')

    ancestor = backend_class
    for _ in range(base_name_only):
        bases = [base for base in ancestor.__bases__ if base is not object]
        if not bases:
            break
        ancestor = bases[0]
        suffix = ancestor.__name__
        if suffix and result.endswith(suffix) and len(result) > len(suffix):
            result = result[:-len(suffix)]
    return result


def _normalize_aliases(alias: Union[str, List[str], Tuple[str, ...], None]) -> Tuple[str, ...]:
    if not alias:
        return ()
    if isinstance(alias, str):
        alias = [alias]
    result: List[str] = []
    for item in alias:
        if item and item not in result:
            result.append(item)
    return tuple(result)


class RegistryNode:
    """
    One registered backend class.

    The tree owns nodes top-down through ``children``; ``parent`` is a back
    reference set once at registration.
    """

    def __init__(self,
                 backend_class: type,
                 name: str,
                 aliases: Tuple[str, ...] = (),
                 is_dir: bool = False,
                 parent: Optional['RegistryNode'] = None):
        self.backend_class = backend_class
        self.name = name
        self.aliases = aliases
        self.is_dir = is_dir
        self.parent = parent
        self.children: Optional[Dict[str, 'RegistryNode']] = {} if is_dir else None

    @property
    def enabled(self) -> bool:
        """Whether the class is available; disabled classes stay resolvable."""
        return getattr(self.backend_class, 'enabled', True) is not False

    @property
    def path(self) -> str:
        """Slash separated canonical names below the root ('' for the root)."""
        parts = []
        node = self
        while node.parent is not None:
            parts.append(node.name)
            node = node.parent
        return PATH_SEPARATOR.join(reversed(parts))

    def matches(self, key: str) -> bool:
        return key == self.name or key in self.aliases

    def find(self, key: str) -> Optional['RegistryNode']:
        """Find a direct child by canonical name first, then by alias."""
        if not self.is_dir or not self.children:
            return None
        node = self.children.get(key)
        if node is not None:
            return node
        for child in self.children.values():
            if key in child.aliases:
                return child
        return None

    def subtree(self) -> Iterator['RegistryNode']:
        """Yield this node and every stored descendant, reachable or not."""
        yield self
        for child in list((self.children or {}).values()):
            yield from child.subtree()

    def __repr__(self) -> str:
        kind = 'dir' if self.is_dir else 'item'
        return f"RegistryNode({self.path or self.name!r}, {self.backend_class.__name__}, {kind})"


class BackendRegistry:
    """
    Registry owning one tree of backend classes.

    The root is a directory holding the root backend class. Directories are
    registered with register(), terminal implementations with register_item().

    Example:
        >>> registry = BackendRegistry(Backend)
        >>> registry.register(CacheBackend)
        True
        >>> registry.register_item(RedisCacheBackend, parent=CacheBackend, alias='redis')
        True
        >>> registry.create('Cache/redis', {'host': 'localhost'})
        <RedisCacheBackend ...>
    """

    method = '[REGISTRY]'

    def __init__(self,
                 root: type,
                 params: Optional[RegistryParams] = None,
                 logger: Optional[RegistryLogger] = None):
        """
        Initialize registry.

        Args:
            root: Root backend class, the root directory of the tree
            params: Naming and uniqueness policy
            logger: RegistryLogger for logging (None for silent, or print when verbose)
        """
        if not isinstance(root, type):
            raise TypeError(f"Registry root must be a class, got {type(root).__name__}")

        self.params = params or RegistryParams()
        self.logger = logger

        root_name = vars(root).get('__backend_name__') or root.__name__
        self.root = RegistryNode(root, root_name, is_dir=True)
        self._nodes: Dict[type, RegistryNode] = {root: self.root}

    # ==================== Registration ====================

    def register(self,
                 backend_class: type,
                 parent: Optional[NameOrClass] = None,
                 name: Optional[str] = None,
                 alias: Union[str, List[str], None] = None,
                 base_name_only: Optional[int] = None) -> bool:
        """
        Register a class as a directory (a sub-registry that may hold children).

        Args:
            backend_class: Class to register (must inherit from the root class)
            parent: Directory to register under (class, name or path; default root)
            name: Explicit canonical name (default: formatted from the class)
            alias: Additional lookup name(s) (default: the class' __alias__)
            base_name_only: Ancestor names to strip when formatting the name

        Returns:
            True if registered, False on a name/alias conflict

        Raises:
            TypeError: If backend_class doesn't inherit from the root class
        """
        return self._register(backend_class, parent, True, name, alias, base_name_only)

    def register_item(self,
                      backend_class: type,
                      parent: Optional[NameOrClass] = None,
                      name: Optional[str] = None,
                      alias: Union[str, List[str], None] = None,
                      base_name_only: Optional[int] = None) -> bool:
        """
        Register a class as a terminal item.

        Same arguments as register(). Re-registering a directory as an item
        clears its directory flag; its children stay stored but can no longer
        be looked up.
        """
        return self._register(backend_class, parent, False, name, alias, base_name_only)

    def _register(self, backend_class, parent, is_dir, name, alias, base_name_only) -> bool:
        root_class = self.root.backend_class
        if not isinstance(backend_class, type) or not issubclass(backend_class, root_class):
            raise TypeError(
                f"Backend class must inherit from {root_class.__name__}, "
                f"got {getattr(backend_class, '__name__', backend_class)!r}"
            )
        if backend_class is root_class:
            self.log(f"Can not register the root class {root_class.__name__}", level='WARNING')
            return False

        parent_node = self._directory_node(parent)
        if parent_node is None:
            self.log(f"Parent '{_label(parent)}' is not a registered directory", level='WARNING')
            return False

        existing = self._nodes.get(backend_class)
        if existing is not None:
            if existing.parent is not parent_node:
                self.log(
                    f"{backend_class.__name__} already registered under '{existing.parent.path or existing.parent.name}'",
                    level='WARNING'
                )
                return False
            if name and name != existing.name:
                self.log(
                    f"{backend_class.__name__} is registered as '{existing.name}', can not rename to '{name}'",
                    level='WARNING'
                )
                return False
            node_name = existing.name
        else:
            node_name = name or self._canonical_name(backend_class, base_name_only)

        if alias is None:
            alias = vars(backend_class).get('__alias__')
        aliases = tuple(a for a in _normalize_aliases(alias) if a != node_name)

        conflict = self._find_conflict(parent_node, node_name, aliases, existing)
        if conflict:
            self.log(
                f"Can not register {backend_class.__name__}: {conflict}",
                level='WARNING'
            )
            return False

        if existing is not None:
            existing.aliases = aliases
            existing.is_dir = is_dir
            if is_dir and existing.children is None:
                existing.children = {}
            node = existing
        else:
            node = RegistryNode(backend_class, node_name, aliases, is_dir, parent_node)
            parent_node.children[node_name] = node
            self._nodes[backend_class] = node

        kind = 'directory' if is_dir else 'item'
        alias_str = f" (alias: {', '.join(aliases)})" if aliases else ""
        self.log(f"Registered {kind}: {node.path} → {backend_class.__name__}{alias_str}", level='DEBUG')
        return True

    def _canonical_name(self, backend_class: type, base_name_only: Optional[int]) -> str:
        explicit = vars(backend_class).get('__backend_name__')
        if explicit:
            return explicit
        if base_name_only is None:
            base_name_only = getattr(backend_class, '__base_name_only__', None)
        if base_name_only is None:
            base_name_only = self.params.base_name_only
        return format_name_from_class(backend_class, base_name_only)

    def _find_conflict(self, parent_node: RegistryNode, node_name: str,
                       aliases: Tuple[str, ...], existing: Optional[RegistryNode]) -> Optional[str]:
        for key in (node_name,) + aliases:
            other = parent_node.find(key)
            if other is not None and other is not existing:
                return f"'{key}' already taken by {other.backend_class.__name__} in '{parent_node.path or parent_node.name}'"

        if self.params.unique_aliases == 'global':
            for node in self._nodes.values():
                if node is existing:
                    continue
                taken = set(aliases).intersection(node.aliases)
                if taken:
                    return f"alias '{sorted(taken)[0]}' already taken by {node.backend_class.__name__}"
        return None

    def unregister(self,
                   target: Optional[NameOrClass] = None,
                   parent: Optional[NameOrClass] = None) -> bool:
        """
        Unregister a class and its whole subtree.

        Args:
            target: Registered name/alias (resolved in parent) or the class itself
            parent: Directory to resolve a name in (default root)

        Returns:
            True if something was removed
        """
        if target is None:
            return False

        if isinstance(target, type):
            node = self._nodes.get(target)
        else:
            scope = self._directory_node(parent)
            node = scope.find(target) if scope is not None else None

        if node is None or node is self.root:
            return False

        del node.parent.children[node.name]
        removed = list(node.subtree())
        for item in removed:
            self._nodes.pop(item.backend_class, None)

        self.log(f"Unregistered {node.backend_class.__name__} ({len(removed)} node(s))", level='DEBUG')
        return True

    # ==================== Lookup ====================

    def resolve(self, key: NameOrClass, parent: Optional[NameOrClass] = None) -> Optional[type]:
        """
        Resolve a name, alias or class among the direct children of a directory.

        Args:
            key: Canonical name, alias, or a class registered in that directory
            parent: Directory scope (default root)

        Returns:
            The registered class, or None if not found
        """
        scope = self._directory_node(parent)
        if scope is None:
            return None
        node = self._resolve_node(key, scope)
        return node.backend_class if node is not None else None

    def _resolve_node(self, key: NameOrClass, scope: RegistryNode) -> Optional[RegistryNode]:
        if isinstance(key, type):
            node = self._nodes.get(key)
            return node if node is not None and node.parent is scope else None
        if isinstance(key, str) and key:
            return scope.find(key)
        return None

    def lookup(self, key: NameOrClass) -> Optional[type]:
        """
        Resolve a name, alias, path or class anywhere in the tree.

        A 'dir/sub/name' path walks directories from the root. A bare name
        is resolved in the root first, then breadth-first in every reachable
        directory.

        Returns:
            The registered class, or None if not found
        """
        node = self.get_node(key)
        return node.backend_class if node is not None else None

    def get_node(self, key: NameOrClass) -> Optional[RegistryNode]:
        """Get the RegistryNode for a class, name, alias or path (None if not found)."""
        if isinstance(key, type):
            node = self._nodes.get(key)
            return node if node is not None and self._is_reachable(node) else None
        if not isinstance(key, str) or not key:
            return None

        if PATH_SEPARATOR in key:
            node = self.root
            for part in key.strip(PATH_SEPARATOR).split(PATH_SEPARATOR):
                node = node.find(part)
                if node is None:
                    return None
            return node

        queue = deque([self.root])
        while queue:
            scope = queue.popleft()
            node = scope.find(key)
            if node is not None:
                return node
            queue.extend(child for child in scope.children.values() if child.is_dir)
        return None

    def _is_reachable(self, node: RegistryNode) -> bool:
        parent = node.parent
        while parent is not None:
            if not parent.is_dir:
                return False
            parent = parent.parent
        return True

    def _directory_node(self, parent: Optional[Union[NameOrClass, RegistryNode]]) -> Optional[RegistryNode]:
        if parent is None:
            return self.root
        node = parent if isinstance(parent, RegistryNode) else self.get_node(parent)
        if node is None or not node.is_dir:
            return None
        return node

    def find_root(self, backend_class: type) -> type:
        """
        Find the root class of the tree a class is registered in.

        Unregistered classes are their own root.
        """
        node = self._nodes.get(backend_class)
        if node is None:
            return backend_class
        while node.parent is not None:
            node = node.parent
        return node.backend_class

    def for_each(self,
                 callback: Callable[[type, str], Any],
                 parent: Optional[NameOrClass] = None) -> Dict[str, type]:
        """
        Call callback(backend_class, name) for each direct child of a directory.

        Children are visited in registration order. Returning BREAK stops the
        iteration; returning a string exposes the entry under that string in
        the result without renaming the registration.

        Returns:
            Dict mapping exposed names to classes of the visited children
        """
        result: Dict[str, type] = {}
        scope = self._directory_node(parent)
        if scope is None:
            return result

        for name, node in list(scope.children.items()):
            ret = callback(node.backend_class, name)
            if ret is BREAK:
                break
            result[ret if isinstance(ret, str) else name] = node.backend_class
        return result

    def items(self, parent: Optional[NameOrClass] = None) -> Dict[str, type]:
        """Get the direct children of a directory (default root) by canonical name."""
        scope = self._directory_node(parent)
        if scope is None:
            return {}
        return {name: node.backend_class for name, node in scope.children.items()}

    def walk(self, parent: Optional[NameOrClass] = None) -> Iterator[Tuple[int, RegistryNode]]:
        """Yield (depth, node) for every reachable node below a directory, depth first."""
        scope = self._directory_node(parent)
        if scope is None:
            return

        def _walk(node: RegistryNode, depth: int):
            for child in node.children.values():
                yield depth, child
                if child.is_dir:
                    yield from _walk(child, depth + 1)

        yield from _walk(scope, 0)

    def names(self) -> List[str]:
        """Get the paths of every reachable registered class."""
        return [node.path for _, node in self.walk()]

    def __contains__(self, key: NameOrClass) -> bool:
        return self.get_node(key) is not None

    def __len__(self) -> int:
        return len(self._nodes) - 1

    # ==================== Factory ====================

    def create(self, backend_type: NameOrClass, args: Optional[Mapping[str, Any]] = None, **kwargs):
        """
        Create an instance of a registered backend.

        Instances left without a name are named after their registry entry.

        Args:
            backend_type: Name, alias, path or class of the backend
            args: Property values for the instance
            **kwargs: Further property values, overriding args

        Returns:
            Instance of the resolved class

        Raises:
            UnresolvableTypeError: If backend_type is not registered

        Example:
            >>> cache = registry.create('redis', host='localhost')
            >>> type(cache).__name__
            'RedisCacheBackend'
        """
        backend_class = self.lookup(backend_type)
        if backend_class is None:
            self.log(f"Can not determine the backend type: {_label(backend_type)}", level='ERROR')
            raise UnresolvableTypeError(backend_type, self.names())

        params = dict(args or {})
        params.update(kwargs)

        node = self._nodes[backend_class]
        if not params.get('name') and 'name' in get_properties(backend_class):
            params['name'] = node.name
        if not node.enabled:
            self.log(f"Creating disabled backend '{node.path}'", level='WARNING')

        instance = backend_class(params, logger=self.logger)
        self.log(f"Created {backend_class.__name__} for '{_label(backend_type)}'", level='DEBUG')
        return instance

    # ==================== Schemas ====================

    def to_json_schema(self, backend_type: NameOrClass) -> Optional[Dict[str, Any]]:
        """
        Derive the JSON-Schema document of a registered backend.

        The document is titled by the class' ``title``, else by the name the
        backend is registered under in this registry.

        Returns:
            The schema, or None if backend_type is not registered
        """
        node = self.get_node(backend_type)
        if node is None:
            return None
        backend_class = node.backend_class
        return to_json_schema(
            get_properties(backend_class),
            title=getattr(backend_class, 'title', None) or node.name,
            description=getattr(backend_class, 'description', None),
        )

    def to_ui_schema(self, backend_type: NameOrClass) -> Optional[Dict[str, Dict[str, Any]]]:
        """Derive the UI-hint document of a registered backend (None if not registered)."""
        node = self.get_node(backend_type)
        if node is None:
            return None
        return to_ui_schema(get_properties(node.backend_class))

    # ==================== Logging ====================

    def log(self, message: str, level: str = 'INFO', method: Optional[str] = None) -> None:
        """
        Standard logging interface.

        Args:
            message: Log message
            level: Log level (INFO, WARNING, ERROR, DEBUG)
            method: Component tag (default '[REGISTRY]')
        """
        method = method or self.method
        if self.logger:
            self.logger.log(level.lower(), method, message)
        elif self.params.verbose:
            print(f"{method} | {level} | {message}")


def _label(key: Any) -> str:
    return getattr(key, '__name__', str(key))
