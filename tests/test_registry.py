"""
The MIT License (MIT)

Copyright (c) 2015-present Rapptz

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS
OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
DEALINGS IN THE SOFTWARE.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import pytest

import slashschema
from slashschema import CommandRegistry, CommandType, OptionType, define_command


def _definition(name: str, **options: Any) -> Dict[str, Any]:
    return {'name': name, 'description': f'The {name} command', 'options': options}


def _stats() -> Dict[str, Any]:
    return _definition(
        'stats',
        period={'type': OptionType.string, 'description': 'The period', 'choices': [{'name': 'Week', 'value': 'week'}]},
        count={'type': OptionType.integer, 'description': 'How many', 'min_value': 1, 'max_value': 50},
    )


def test_add_command():
    registry = CommandRegistry()
    schema = define_command(_stats())
    registry.add_command(schema)

    assert len(registry) == 1
    assert 'stats' in registry
    assert registry.get_command('stats') is schema
    assert list(registry) == [schema]

    with pytest.raises(slashschema.CommandAlreadyRegistered) as excinfo:
        registry.add_command(define_command(_stats()))
    assert excinfo.value.name == 'stats'

    other = define_command(_stats())
    registry.add_command(other, override=True)
    assert registry.get_command('stats') is other

    with pytest.raises(TypeError):
        registry.add_command(_stats())  # type: ignore


def test_commands_are_keyed_by_type():
    registry = CommandRegistry()
    registry.define(_definition('stats'))
    menu = registry.define({'name': 'stats', 'type': CommandType.user})

    assert len(registry) == 2
    assert registry.get_command('stats', type=CommandType.user) is menu
    assert registry.get_commands(type=CommandType.user) == [menu]
    assert registry.get_command('stats', type=CommandType.message) is None

    assert registry.remove_command('stats', type=CommandType.user) is menu
    assert registry.remove_command('stats', type=CommandType.user) is None
    assert len(registry) == 1

    registry.clear_commands()
    assert len(registry) == 0
    assert 'stats' not in registry


def test_define_invalid():
    registry = CommandRegistry()

    with pytest.raises(slashschema.InvalidSchema):
        registry.define({'name': 'Stats', 'description': 'Upper case name'})

    assert len(registry) == 0


def test_load(caplog: pytest.LogCaptureFixture):
    registry = CommandRegistry()
    definitions = [
        _stats(),
        _definition('broken', value={'type': OptionType.boolean, 'description': 'Bad', 'min_length': 1}),
        _definition('ping'),
    ]

    with caplog.at_level(logging.ERROR, logger='slashschema.registry'):
        failed = registry.load(definitions)

    assert [command.name for command in registry] == ['stats', 'ping']
    assert len(failed) == 1
    assert isinstance(failed[0], slashschema.IllegalConstraintForKind)
    assert failed[0].path == 'broken.value'

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.ERROR
    assert "'broken'" in record.getMessage()
    assert record.exc_info is not None


def test_to_payload():
    registry = CommandRegistry()
    registry.load([_stats(), {'name': 'Inspect', 'type': CommandType.message}])

    payload = registry.to_payload()
    assert [command['name'] for command in payload] == ['stats', 'Inspect']
    assert payload[0]['options'][1] == {
        'type': 4,
        'name': 'count',
        'description': 'How many',
        'required': False,
        'min_value': 1,
        'max_value': 50,
    }
    assert payload[1] == {'name': 'Inspect', 'type': 3, 'description': ''}


def test_resolve():
    registry = CommandRegistry()
    registry.define(_stats())

    result = registry.resolve({'name': 'stats', 'type': 1, 'options': [{'name': 'count', 'type': 4, 'value': 3}]})  # type: ignore
    assert result.path == ('stats',)
    assert result.qualified_name == 'stats'
    assert result.namespace.count == 3
    assert result.namespace.period is None

    with pytest.raises(slashschema.NumberOutOfRange) as excinfo:
        registry.resolve({'name': 'stats', 'options': [{'name': 'count', 'type': 4, 'value': 51}]})  # type: ignore
    assert excinfo.value.path == 'stats.count'

    with pytest.raises(slashschema.CommandNotFound):
        registry.resolve({'name': 'unknown', 'type': 1})  # type: ignore

    with pytest.raises(slashschema.CommandNotFound):
        registry.resolve({'name': 'stats', 'type': 2})  # type: ignore
