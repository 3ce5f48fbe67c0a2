# Tests for JSON schema and UI schema derivation

import copy

from backforge.schema import FieldDescriptor, capitalize, to_json_schema, to_ui_schema


def test_json_schema_required_field():
    schema = to_json_schema({'price': {'type': 'number', 'required': True}}, title='Shop')

    assert schema == {
        'required': ['price'],
        'properties': {'price': {'type': 'number', 'required': True, 'name': 'price'}},
        'title': 'Shop',
        'type': 'object',
    }


def test_json_schema_required_order():
    schema = to_json_schema({
        'b': {'type': 'string', 'required': True},
        'a': {'type': 'string'},
        'c': {'type': 'string', 'required': True},
    })
    assert schema['required'] == ['b', 'c']


def test_json_schema_keeps_explicit_name():
    schema = to_json_schema({'host': {'type': 'string', 'name': 'Hostname'}})
    assert schema['properties']['host']['name'] == 'Hostname'


def test_default_from_value():
    schema = to_json_schema({
        'ttl': {'type': 'number', 'value': 60},
        'enabled': {'type': 'boolean', 'value': False},
        'icon': {'type': 'string'},
    })
    properties = schema['properties']

    assert properties['ttl']['value'] == 60
    assert properties['ttl']['default'] == 60
    assert properties['enabled']['default'] is False
    assert 'default' not in properties['icon']


def test_array_title_synthesis():
    schema = to_json_schema({
        'tags': {'type': 'array'},
        'named': {'type': 'array', 'name': 'labels'},
        'custom': {'type': 'array', 'title': 'Custom'},
        'user_tags': {'type': 'array'},
    })
    properties = schema['properties']

    assert properties['tags']['title'] == 'Tags List'
    assert properties['named']['title'] == 'Labels List'
    assert properties['custom']['title'] == 'Custom'
    assert properties['user_tags']['title'] == 'User_tags List'


def test_array_title_only_for_plain_arrays():
    schema = to_json_schema({'alias': {'type': ['string', 'array']}, 'host': {'type': 'string'}})
    assert 'title' not in schema['properties']['alias']
    assert 'title' not in schema['properties']['host']


def test_polymorphic_field_drops_type():
    schema = to_json_schema({
        'mode': {'type': 'string', 'anyOf': [{'type': 'string'}, {'type': 'array', 'name': 'modes'}]},
    })
    mode = schema['properties']['mode']

    assert 'type' not in mode
    assert mode['anyOf'][1]['title'] == 'Modes List'
    assert 'title' not in mode['anyOf'][0]


def test_one_of_alternative_uses_field_name():
    schema = to_json_schema({'choice': {'oneOf': [{'type': 'array'}, {'type': 'array', 'title': 'Fixed'}]}})
    one_of = schema['properties']['choice']['oneOf']

    assert one_of[0]['title'] == 'Choice List'
    assert one_of[1]['title'] == 'Fixed'


def test_nested_alternatives_not_scanned():
    schema = to_json_schema({
        'outer': {'anyOf': [{'type': 'object', 'anyOf': [{'type': 'array'}]}]},
    })
    inner = schema['properties']['outer']['anyOf'][0]

    assert inner['type'] == 'object'
    assert 'title' not in inner['anyOf'][0]


def test_description_only_when_declared():
    assert 'description' not in to_json_schema({}, title='Empty')
    assert 'description' not in to_json_schema({}, title='Empty', description='')
    assert to_json_schema({}, description='Caches')['description'] == 'Caches'
    assert to_json_schema({}) == {'required': [], 'properties': {}, 'type': 'object'}


def test_json_schema_does_not_mutate_input():
    declared = {
        'mode': {'type': 'string', 'anyOf': [{'type': 'array'}], 'value': ['x']},
        'tags': FieldDescriptor(type='array'),
    }
    snapshot = copy.deepcopy(declared)

    schema = to_json_schema(declared)
    schema['properties']['mode']['value'].append('y')

    assert declared == snapshot
    assert declared['tags'].title is None


def test_json_schema_is_repeatable():
    declared = {'tags': {'type': 'array', 'required': True}}
    assert to_json_schema(declared, title='T') == to_json_schema(declared, title='T')


def test_ui_schema_placeholder_falls_back_to_description():
    ui = to_ui_schema({'name': {'description': 'the name', 'placeholder': None}})

    assert ui == {
        'name': {
            'ui:title': 'name',
            'ui:description': 'the name',
            'ui:placeholder': 'the name',
            'ui:help': None,
        }
    }


def test_ui_schema_explicit_values():
    ui = to_ui_schema({
        'host': {'type': 'string', 'title': 'Host', 'placeholder': 'localhost', 'hint': 'DNS name or IP', 'required': True},
        'port': {'type': 'integer'},
    })

    assert list(ui) == ['host', 'port']
    assert ui['host'] == {
        'ui:title': 'Host',
        'ui:description': None,
        'ui:placeholder': 'localhost',
        'ui:help': 'DNS name or IP',
    }
    assert ui['port']['ui:title'] == 'port'


def test_capitalize():
    assert capitalize('tags') == 'Tags'
    assert capitalize('aBC') == 'ABC'
    assert capitalize('user_tags') == 'User_tags'
    assert capitalize('') == ''
    assert capitalize(None) is None
