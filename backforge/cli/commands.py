"""
Command implementations for the BackForge CLI.

Handles info, schema, create, and validate commands.
"""

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..backends import auto_register_backends, default_registry
from ..backends.registry import BackendRegistry
from ..configuration.logger import RegistryLogger
from ..configuration.params import RegistryParams
from ..errors import UnresolvableTypeError
from . import display


def get_registry(args: argparse.Namespace) -> BackendRegistry:
    """Get the registry commands operate on, with logging set up from args."""
    registry = default_registry
    debug = getattr(args, 'debug', False)
    log_file = getattr(args, 'log_file', None)
    if (debug or log_file) and registry.logger is None:
        registry.logger = RegistryLogger(
            log_file=log_file,
            console_level='DEBUG' if debug else 'WARNING',
        )
    return registry


def show_info(args: argparse.Namespace) -> int:
    """
    Display system information.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    if args.target == 'backends':
        registry = get_registry(args)
        if not _load_plugins(registry, args.plugin or []):
            return 1
        print_backends_info(registry)
        return 0

    if args.target == 'examples':
        print_examples()
        return 0

    print_version()
    return 0


def show_schema(args: argparse.Namespace) -> int:
    """
    Print the derived schema of a registered backend.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    registry = get_registry(args)
    if not _load_plugins(registry, args.plugin or []):
        return 1

    schema = registry.to_ui_schema(args.type) if args.ui else registry.to_json_schema(args.type)
    if schema is None:
        display.print_error(f"Unknown backend '{args.type}'. Available: {', '.join(registry.names()) or 'none'}")
        return 1

    print(dump_document(schema, args.format))
    return 0


def create_backends(args: argparse.Namespace) -> int:
    """
    Create every backend listed in a configuration file.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (1 if any backend could not be created)
    """
    registry = get_registry(args)
    try:
        config = load_config(args.config)
    except Exception as e:
        display.print_error(f"Configuration error: {e}")
        return 1

    registry.params = config['registry']
    if not _load_plugins(registry, config['plugins']):
        return 1

    failed_count = 0
    for entry in config['backends']:
        entry = dict(entry)
        backend_type = entry.pop('type')
        try:
            backend = registry.create(backend_type, entry)
        except UnresolvableTypeError as e:
            failed_count += 1
            display.print_error(str(e))
            continue

        state = '' if backend.enabled else ' (disabled)'
        display.print_success(f"Created {backend.name}: {type(backend).__name__}{state}")

    total = len(config['backends'])
    print(f"\nSummary: {total - failed_count}/{total} backends created")
    return 1 if failed_count > 0 else 0


def validate_config(args: argparse.Namespace) -> int:
    """
    Validate configuration file.

    Checks that every listed backend type resolves and that required
    properties are set.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config_path = Path(args.config)
    if not config_path.exists():
        display.print_error(f"Config file not found: {config_path}")
        return 1

    registry = get_registry(args)
    try:
        config = load_config(str(config_path))
    except Exception as e:
        display.print_error(f"Invalid configuration: {e}")
        return 1

    registry.params = config['registry']
    if not _load_plugins(registry, config['plugins']):
        return 1

    problems: List[str] = []
    for i, entry in enumerate(config['backends'], 1):
        entry = dict(entry)
        backend_type = entry.pop('type')
        if registry.lookup(backend_type) is None:
            problems.append(f"backends[{i}]: unknown backend type '{backend_type}'")
            continue

        backend = registry.create(backend_type, entry)
        missing = backend.missing_required()
        if missing:
            problems.append(f"backends[{i}] ({backend_type}): missing required {', '.join(missing)}")

    if problems:
        display.print_error(f"Invalid configuration: {config_path}")
        for problem in problems:
            print(f"  - {problem}")
        return 1

    display.print_success(f"Configuration is valid: {config_path}")
    if not args.quiet:
        print(f"\nBackends ({len(config['backends'])}):")
        for i, entry in enumerate(config['backends'], 1):
            print(f"  {i}. {entry['type']}")
    return 0


# Helper functions

def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Returns:
        Dict with 'registry' (RegistryParams), 'plugins' (list of package
        names) and 'backends' (list of backend entries, each with a 'type')

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the structure is invalid
    """
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Configuration must be a mapping")

    registry_params = RegistryParams(**(config.get('registry') or {}))

    plugins = config.get('plugins') or []
    if isinstance(plugins, str):
        plugins = [plugins]
    if not all(isinstance(p, str) for p in plugins):
        raise ValueError("'plugins' must be a list of package names")

    backends = config.get('backends') or []
    if not isinstance(backends, list):
        raise ValueError("'backends' must be a list")
    for i, entry in enumerate(backends, 1):
        if not isinstance(entry, dict) or not entry.get('type'):
            raise ValueError(f"backends[{i}] must be a mapping with a 'type'")

    return {'registry': registry_params, 'plugins': list(plugins), 'backends': backends}


def _load_plugins(registry: BackendRegistry, plugins: List[str]) -> bool:
    for plugin in plugins:
        try:
            auto_register_backends(registry, plugin)
        except ImportError as e:
            display.print_error(f"Failed to load plugin '{plugin}': {e}")
            return False
    return True


def dump_document(document: Dict[str, Any], fmt: str = 'json') -> str:
    """Serialize a schema document as JSON or YAML, keeping key order."""
    if fmt == 'yaml':
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True).rstrip()
    return json.dumps(document, indent=2, ensure_ascii=False)


def print_version():
    """Print version information."""
    from .. import __version__
    display.print_banner()
    print(f"Version: {__version__}")
    print("Python API: Available via 'from backforge import Backend, BackendRegistry'")


def print_backends_info(registry: BackendRegistry):
    """Print the registry tree."""
    display.print_section("Registered Backends")

    if not len(registry):
        print("  No backends registered")
        return

    for depth, node in registry.walk():
        label = display.format_node(node.name, node.is_dir, node.enabled, node.aliases)
        display.print_table_row("  " * depth + label, node.backend_class.__name__, width1=32)


def print_examples():
    """Print usage examples."""
    display.print_section("Usage Examples")

    examples = [
        ("Show registered backends", "backforge info backends --plugin mypackage.backends"),
        ("Print a JSON schema", "backforge schema Cache/redis --plugin mypackage.backends"),
        ("Print a UI schema as YAML", "backforge schema redis --ui --format yaml --plugin mypackage.backends"),
        ("Create backends from a config", "backforge create backends.yaml"),
        ("Validate config", "backforge validate backends.yaml"),
    ]

    for desc, cmd in examples:
        print(f"\n  {desc}:")
        print(f"  $ {cmd}")

    print()
