# Tests for the Backend base class

from backforge.backends import BACKEND_PROPERTIES, Backend
from backforge.schema import FieldDescriptor


def test_base_properties_declared():
    assert list(Backend.get_properties()) == list(BACKEND_PROPERTIES)
    assert list(BACKEND_PROPERTIES) == ['name', 'enabled', 'icon', 'display_name', 'alias', 'description']


def test_backend_direct_construction():
    backend = Backend()

    assert backend.name == 'Backend'
    assert backend.enabled is True
    assert backend.icon is None
    assert backend.to_dict() == {'name': 'Backend', 'enabled': True}


def test_concrete_construction_skips_resolution(classes):
    backend = classes.RedisCacheBackend({'host': 'localhost'})

    assert type(backend) is classes.RedisCacheBackend
    assert backend.host == 'localhost'
    assert backend.ttl == 60
    assert backend.tags is None
    assert backend.name == 'Redis'


def test_subclass_properties_are_flattened_in_order(classes):
    assert list(classes.RedisCacheBackend.get_properties()) == [
        'name', 'enabled', 'icon', 'display_name', 'alias', 'description',
        'ttl', 'host', 'tags',
    ]
    # Siblings do not see each other's declarations
    assert 'host' not in classes.MemoryCacheBackend.get_properties()


def test_override_keeps_position():
    class DisabledByDefaultBackend(Backend):
        properties = {'enabled': {'type': 'boolean', 'value': False}}

    properties = DisabledByDefaultBackend.get_properties()
    assert list(properties).index('enabled') == 1
    assert properties['enabled'].value is False
    assert DisabledByDefaultBackend().enabled is False
    # The base declaration is untouched
    assert Backend.get_properties()['enabled'].value is True


def test_define_properties_after_declaration(classes):
    classes.MemoryCacheBackend.define_properties({'size': {'type': 'integer', 'value': 128}})

    assert classes.MemoryCacheBackend().size == 128
    assert 'size' not in classes.CacheBackend.get_properties()


def test_define_properties_recreate():
    class BareBackend(Backend):
        pass

    BareBackend.define_properties({'path': FieldDescriptor(type='string')}, recreate=True)
    assert list(BareBackend.get_properties()) == ['path']


def test_name_setter_ignores_empty(classes):
    assert classes.RedisCacheBackend({'name': ''}).name == 'Redis'
    assert classes.RedisCacheBackend({'name': None}).name == 'Redis'
    assert classes.RedisCacheBackend({'name': 'main'}).name == 'main'


def test_enabled_defaults_to_true(classes):
    assert classes.RedisCacheBackend({'enabled': None}).enabled is True
    assert classes.RedisCacheBackend({'enabled': False}).enabled is False


def test_default_values_are_copied():
    class ListBackend(Backend):
        properties = {'hosts': {'type': 'array', 'value': ['a']}}

    first = ListBackend()
    first.hosts.append('b')
    assert ListBackend().hosts == ['a']


def test_undeclared_args_are_ignored(classes, mocker):
    logger = mocker.Mock()
    backend = classes.RedisCacheBackend({'host': 'h', 'port': 6379}, logger=logger)

    assert not hasattr(backend, 'port')
    level, method, message = logger.log.call_args.args
    assert level == 'debug'
    assert method == '[REDIS]'
    assert 'port' in message


def test_missing_required(classes):
    assert classes.RedisCacheBackend().missing_required() == ['host']
    assert classes.RedisCacheBackend({'host': 'h'}).missing_required() == []


def test_to_dict(classes):
    backend = classes.RedisCacheBackend({'host': 'h', 'alias': ['r']})
    assert backend.to_dict() == {
        'name': 'Redis', 'enabled': True, 'alias': ['r'], 'ttl': 60, 'host': 'h',
    }


def test_class_to_json_schema(classes):
    schema = classes.RedisCacheBackend.to_json_schema()

    assert schema['title'] == 'Redis'
    assert schema['type'] == 'object'
    assert schema['description'] == 'Key-value caches'
    assert schema['required'] == ['name', 'host']
    assert schema['properties']['tags']['title'] == 'Tags List'
    assert schema['properties']['ttl']['default'] == 60
    assert schema['properties']['enabled']['default'] is True
    # Union types get no synthesized title
    assert 'title' not in schema['properties']['alias']
    assert schema['properties']['alias']['type'] == ['string', 'array']


def test_class_schema_title_and_description(classes):
    schema = classes.QueueBackend.to_json_schema()
    assert schema['title'] == 'Message queues'
    assert 'description' not in schema


def test_class_to_ui_schema(classes):
    ui = classes.RedisCacheBackend.to_ui_schema()

    assert list(ui) == list(classes.RedisCacheBackend.to_json_schema()['properties'])
    assert ui['host'] == {
        'ui:title': 'host',
        'ui:description': None,
        'ui:placeholder': 'localhost',
        'ui:help': None,
    }
    assert ui['name']['ui:placeholder'] == 'the unique name of the backend'


def test_backend_events(classes):
    backend = classes.RedisCacheBackend({'host': 'h'})
    received = []
    backend.on('connected', lambda host: received.append(host))

    assert backend.emit('connected', 'h') is True
    assert received == ['h']


def test_repr(classes):
    assert repr(classes.RedisCacheBackend({'name': 'main'})) == "<RedisCacheBackend name='main' enabled=True>"
