# pytest configuration and fixtures

import sys
import textwrap
from types import SimpleNamespace

import pytest

from backforge.backends import Backend, BackendRegistry


@pytest.fixture
def registry():
    """Fresh registry rooted at Backend."""
    return BackendRegistry(Backend)


@pytest.fixture
def classes():
    """Small backend hierarchy, created per test so class state never leaks."""

    class CacheBackend(Backend):
        description = 'Key-value caches'
        properties = {
            'ttl': {'type': 'number', 'value': 60, 'description': 'seconds to keep entries'},
        }

    class RedisCacheBackend(CacheBackend):
        __alias__ = 'redis'
        properties = {
            'host': {'type': 'string', 'required': True, 'placeholder': 'localhost'},
            'tags': {'type': 'array', 'items': {'type': 'string'}},
        }

    class MemoryCacheBackend(CacheBackend):
        __alias__ = ['memory', 'mem']

    class QueueBackend(Backend):
        title = 'Message queues'

    class KafkaQueueBackend(QueueBackend):
        enabled = False

    return SimpleNamespace(
        CacheBackend=CacheBackend,
        RedisCacheBackend=RedisCacheBackend,
        MemoryCacheBackend=MemoryCacheBackend,
        QueueBackend=QueueBackend,
        KafkaQueueBackend=KafkaQueueBackend,
    )


@pytest.fixture
def populated(registry, classes):
    """Registry holding Cache/{Redis,Memory} and Queue/Kafka."""
    assert registry.register(classes.CacheBackend)
    assert registry.register_item(classes.RedisCacheBackend, parent=classes.CacheBackend)
    assert registry.register_item(classes.MemoryCacheBackend, parent=classes.CacheBackend)
    assert registry.register(classes.QueueBackend)
    assert registry.register_item(classes.KafkaQueueBackend, parent='Queue')
    return registry


@pytest.fixture
def plugin_package(tmp_path, monkeypatch):
    """Importable package 'store_plugins' with backends laid out by convention."""
    package_name = 'store_plugins'
    package_dir = tmp_path / package_name
    package_dir.mkdir()

    files = {
        '__init__.py': '',
        'base.py': '''
            from backforge.backends import Backend

            class StoreBackend(Backend):
                description = 'Object stores'
        ''',
        's3.py': '''
            from .base import StoreBackend

            class S3StoreBackend(StoreBackend):
                __alias__ = 's3'
                description = 'Amazon S3'
                properties = {'bucket': {'type': 'string', 'required': True}}
        ''',
        'local.py': '''
            from .base import StoreBackend

            class Helper:
                pass

            class LocalStoreBackend(StoreBackend):
                properties = {'root': {'type': 'string', 'value': '/tmp'}}
        ''',
        'bad_alias.py': '''
            from .base import StoreBackend

            class BadAliasStoreBackend(StoreBackend):
                __alias__ = 5
        ''',
        'broken.py': '''
            raise RuntimeError('boom')
        ''',
    }
    for filename, content in files.items():
        (package_dir / filename).write_text(textwrap.dedent(content))

    monkeypatch.syspath_prepend(str(tmp_path))
    yield package_name

    for module_name in list(sys.modules):
        if module_name == package_name or module_name.startswith(package_name + '.'):
            del sys.modules[module_name]
