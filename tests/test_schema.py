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

import math
from typing import Any, Dict

import pytest

import slashschema
from slashschema import ChannelType, Choice, CommandType, OptionType, define_command, lookup_subcommand_path


def _range_option() -> Dict[str, Any]:
    return {
        'type': OptionType.string,
        'description': 'The range to look at',
        'choices': [
            Choice(name='4 weeks', value='short'),
            Choice(name='6 months', value='medium'),
            Choice(name='lifetime', value='long'),
        ],
    }


def _top_definition() -> Dict[str, Any]:
    return {
        'name': 'top',
        'description': 'Look at top statistics',
        'options': {
            kind: {
                'type': OptionType.subcommand,
                'description': f'See your top {kind}',
                'options': {
                    'user': {'type': OptionType.user, 'description': f'The user to see the top {kind} of'},
                    'range': _range_option(),
                },
            }
            for kind in ('artists', 'tracks', 'albums')
        },
    }


def _command(**option: Any) -> Dict[str, Any]:
    option.setdefault('description', 'An option')
    return {'name': 'cmd', 'description': 'A command', 'options': {'value': option}}


def test_define_command_builds_schema():
    schema = define_command(_top_definition())

    assert schema.name == 'top'
    assert schema.type is CommandType.chat_input
    assert list(schema.options) == ['artists', 'tracks', 'albums']
    assert schema.subcommand_names == ['artists', 'tracks', 'albums']
    assert schema.has_subcommands()

    artists = schema.options['artists']
    assert artists.is_subcommand()
    assert not artists.required
    assert list(artists.options) == ['user', 'range']

    range_option = artists.options['range']
    assert range_option.path == 'top.artists.range'
    assert range_option.type is OptionType.string
    assert [c.value for c in range_option.choices] == ['short', 'medium', 'long']
    assert not range_option.required


def test_define_command_accepts_raw_values():
    schema = define_command(
        {
            'name': 'cmd',
            'description': 'A command',
            'options': {
                'amount': {'type': 4, 'description': 'An amount', 'required': True, 'min_value': 1, 'max_value': 10},
                'kind': {
                    'type': 'string',
                    'description': 'A kind',
                    'choices': [{'name': 'First', 'value': 'first'}],
                },
                'where': {'type': 'channel', 'description': 'A channel', 'channel_types': ['text', 5]},
            },
        }
    )

    amount = schema.options['amount']
    assert amount.type is OptionType.integer
    assert amount.required
    assert (amount.min_value, amount.max_value) == (1, 10)
    assert schema.options['kind'].choices == (Choice(name='First', value='first'),)
    assert schema.options['where'].channel_types == frozenset({ChannelType.text, ChannelType.news})


def test_define_command_returns_schema_as_is():
    schema = define_command(_top_definition())
    assert define_command(schema) is schema


def test_schema_is_immutable():
    schema = define_command(_top_definition())

    with pytest.raises(TypeError):
        schema.options['other'] = schema.options['artists']  # type: ignore

    with pytest.raises(AttributeError):
        schema.name = 'other'  # type: ignore


def test_schema_equality():
    assert define_command(_top_definition()) == define_command(_top_definition())


def test_option_names_are_unique_per_level():
    # Same leaf names under different subcommands are fine
    schema = define_command(_top_definition())
    assert schema.get_option('tracks.user') is not None

    data = {
        'name': 'cmd',
        'description': 'A command',
        'options': [
            {'name': 'value', 'type': OptionType.string, 'description': 'First'},
            {'name': 'value', 'type': OptionType.integer, 'description': 'Second'},
        ],
    }
    with pytest.raises(slashschema.DuplicateOptionName) as excinfo:
        define_command(data)

    assert excinfo.value.name == 'value'
    assert excinfo.value.path == 'cmd'
    assert excinfo.value.kind == 'DuplicateOptionName'


def test_duplicate_option_name_in_pairs():
    data = {
        'name': 'cmd',
        'description': 'A command',
        'options': [
            ('sub', {'type': OptionType.subcommand, 'description': 'Sub'}),
            ('sub', {'type': OptionType.subcommand, 'description': 'Sub again'}),
        ],
    }
    with pytest.raises(slashschema.DuplicateOptionName):
        define_command(data)


@pytest.mark.parametrize(
    'options',
    [
        # group inside a subcommand
        {
            'sub': {
                'type': OptionType.subcommand,
                'description': 'Sub',
                'options': {'group': {'type': OptionType.subcommand_group, 'description': 'Group'}},
            }
        },
        # subcommand inside a subcommand
        {
            'sub': {
                'type': OptionType.subcommand,
                'description': 'Sub',
                'options': {'inner': {'type': OptionType.subcommand, 'description': 'Inner'}},
            }
        },
        # group inside a group
        {
            'group': {
                'type': OptionType.subcommand_group,
                'description': 'Group',
                'options': {
                    'inner': {
                        'type': OptionType.subcommand_group,
                        'description': 'Inner',
                        'options': {'sub': {'type': OptionType.subcommand, 'description': 'Sub'}},
                    }
                },
            }
        },
        # leaf directly inside a group
        {
            'group': {
                'type': OptionType.subcommand_group,
                'description': 'Group',
                'options': {'leaf': {'type': OptionType.string, 'description': 'Leaf'}},
            }
        },
    ],
)
def test_invalid_nesting_depth(options: Dict[str, Any]):
    with pytest.raises(slashschema.InvalidNestingDepth):
        define_command({'name': 'cmd', 'description': 'A command', 'options': options})


@pytest.mark.parametrize('leaf_first', [True, False])
def test_subcommands_cannot_mix_with_options(leaf_first: bool):
    leaf = ('value', {'type': OptionType.string, 'description': 'A value'})
    sub = ('sub', {'type': OptionType.subcommand, 'description': 'Sub'})
    options = [leaf, sub] if leaf_first else [sub, leaf]

    with pytest.raises(slashschema.InvalidNestingDepth) as excinfo:
        define_command({'name': 'cmd', 'description': 'A command', 'options': options})
    assert excinfo.value.path == 'cmd'


def test_group_nesting_is_allowed():
    schema = define_command(
        {
            'name': 'top',
            'description': 'Look at top statistics',
            'options': {
                'listeners': {
                    'type': OptionType.subcommand_group,
                    'description': 'See top listeners',
                    'options': {
                        'album': {
                            'type': OptionType.subcommand,
                            'description': 'See top listeners of an album',
                            'options': {
                                'search': {'type': OptionType.string, 'description': 'The album', 'required': True}
                            },
                        },
                    },
                },
            },
        }
    )

    search = schema.get_option('listeners.album.search')
    assert search is not None
    assert search.path == 'top.listeners.album.search'
    assert search.required


@pytest.mark.parametrize(
    ('type', 'value'),
    [
        (OptionType.string, 1),
        (OptionType.integer, 'one'),
        (OptionType.integer, 1.5),
        (OptionType.integer, True),
        (OptionType.number, '1.5'),
        (OptionType.number, False),
    ],
)
def test_choice_type_mismatch(type: OptionType, value: Any):
    with pytest.raises(slashschema.ChoiceTypeMismatch) as excinfo:
        define_command(_command(type=type, choices=[Choice(name='choice', value=value)]))

    assert excinfo.value.value == value
    assert excinfo.value.path == 'cmd.value'


def test_number_choices_accept_integers():
    schema = define_command(
        _command(type=OptionType.number, choices=[Choice(name='one', value=1), Choice(name='half', value=0.5)])
    )
    assert len(schema.options['value'].choices) == 2


def test_duplicate_choice_values():
    choices = [Choice(name='a', value='same'), Choice(name='b', value='same')]
    with pytest.raises(slashschema.DuplicateChoiceValue):
        define_command(_command(type=OptionType.string, choices=choices))

    # names may repeat
    choices = [Choice(name='same', value='a'), Choice(name='same', value='b')]
    define_command(_command(type=OptionType.string, choices=choices))


@pytest.mark.parametrize(
    ('type', 'constraint', 'value'),
    [
        (OptionType.user, 'min_length', 1),
        (OptionType.integer, 'max_length', 10),
        (OptionType.string, 'min_value', 1),
        (OptionType.boolean, 'choices', [Choice(name='yes', value='yes')]),
        (OptionType.role, 'channel_types', [ChannelType.text]),
        (OptionType.attachment, 'autocomplete', True),
        (OptionType.string, 'options', {'inner': {'type': OptionType.string, 'description': 'Inner'}}),
        (OptionType.subcommand, 'choices', [Choice(name='a', value='a')]),
    ],
)
def test_illegal_constraint_for_kind(type: OptionType, constraint: str, value: Any):
    with pytest.raises(slashschema.IllegalConstraintForKind) as excinfo:
        define_command(_command(type=type, **{constraint: value}))

    assert excinfo.value.constraint == constraint


@pytest.mark.parametrize(
    'option',
    [
        {'type': OptionType.string, 'min_length': 10, 'max_length': 5},
        {'type': OptionType.string, 'min_length': -1},
        {'type': OptionType.string, 'max_length': 0},
        {'type': OptionType.integer, 'min_value': 10, 'max_value': 1},
        {'type': OptionType.integer, 'min_value': 1.5},
        {'type': OptionType.number, 'max_value': '10'},
        {'type': OptionType.number, 'min_value': math.nan},
        {'type': OptionType.number, 'max_value': math.inf},
        {'type': OptionType.number, 'min_value': -math.inf, 'max_value': 1},
    ],
)
def test_invalid_bounds(option: Dict[str, Any]):
    with pytest.raises(slashschema.IllegalConstraintForKind):
        define_command(_command(**option))


@pytest.mark.parametrize('channel_type', [ChannelType.private, ChannelType.group, 1, 'group'])
def test_channel_types_reject_direct_messages(channel_type: Any):
    with pytest.raises(slashschema.InvalidChannelTypeForDM) as excinfo:
        define_command(_command(type=OptionType.channel, channel_types=[ChannelType.text, channel_type]))

    assert isinstance(excinfo.value, slashschema.IllegalConstraintForKind)
    assert excinfo.value.channel_type in (ChannelType.private, ChannelType.group)


@pytest.mark.parametrize(
    'data',
    [
        {'name': 'Top', 'description': 'Upper case'},
        {'name': 'has space', 'description': 'Space'},
        {'name': 'a' * 33, 'description': 'Too long'},
        {'name': 'top', 'description': ''},
        {'name': 'top', 'description': 'x' * 101},
        {'name': 'top'},
        {'name': 'top', 'description': 'Bad type', 'type': 7},
        {'name': 'top', 'description': 'Bad option type', 'options': {'x': {'type': 99, 'description': 'X'}}},
        {'name': 'top', 'description': 'Bad option name', 'options': {'X': {'type': 3, 'description': 'X'}}},
        {'name': 'top', 'description': 'Empty group', 'options': {'g': {'type': 2, 'description': 'G'}}},
        {'name': 'top', 'description': 'Bad required', 'options': {'x': {'type': 3, 'description': 'X', 'required': 1}}},
        {'name': 'top', 'description': 'Too many', 'options': {f'o{i}': {'type': 3, 'description': 'X'} for i in range(26)}},
        {'name': 'menu', 'type': CommandType.user, 'options': {'x': {'type': 3, 'description': 'X'}}},
        'not a mapping',
    ],
)
def test_invalid_schema(data: Any):
    with pytest.raises(slashschema.InvalidSchema):
        define_command(data)


def test_autocomplete_and_choices_are_exclusive():
    with pytest.raises(slashschema.InvalidSchema):
        define_command(_command(type=OptionType.string, autocomplete=True, choices=[Choice(name='a', value='a')]))

    schema = define_command(_command(type=OptionType.string, autocomplete=True))
    assert schema.options['value'].autocomplete


def test_too_many_choices():
    choices = [Choice(name=str(i), value=i) for i in range(26)]
    with pytest.raises(slashschema.InvalidSchema):
        define_command(_command(type=OptionType.integer, choices=choices))


def test_context_menu_commands():
    schema = define_command({'name': 'Show Stats', 'type': CommandType.user})
    assert schema.type is CommandType.user
    assert schema.description == ''
    assert not schema.options
    assert schema.to_dict() == {'name': 'Show Stats', 'type': 2, 'description': ''}


def test_lookup_subcommand_path():
    schema = define_command(_top_definition())

    artists = lookup_subcommand_path(schema, ['artists'])
    assert artists is not None and artists.name == 'artists'
    assert lookup_subcommand_path(schema, ('top', 'artists')) is artists
    assert lookup_subcommand_path(schema, 'top.artists') is artists

    assert lookup_subcommand_path(schema, ['missing']) is None
    assert lookup_subcommand_path(schema, ['artists', 'range']) is None
    assert lookup_subcommand_path(schema, []) is None


def test_walk_options():
    schema = define_command(_top_definition())
    paths = [option.path for option in schema.walk_options()]
    assert paths[:3] == ['top.artists', 'top.artists.user', 'top.artists.range']
    assert len(paths) == 9


def test_to_dict():
    schema = define_command(
        {
            'name': 'cmd',
            'description': 'A command',
            'options': {
                'text': {'type': OptionType.string, 'description': 'Text', 'required': True, 'max_length': 20},
                'where': {'type': OptionType.channel, 'description': 'Where', 'channel_types': [ChannelType.text]},
            },
        }
    )

    assert schema.to_dict() == {
        'name': 'cmd',
        'type': 1,
        'description': 'A command',
        'options': [
            {'type': 3, 'name': 'text', 'description': 'Text', 'required': True, 'max_length': 20},
            {'type': 7, 'name': 'where', 'description': 'Where', 'required': False, 'channel_types': [0]},
        ],
    }

    top = define_command(_top_definition()).to_dict()
    artists = top['options'][0]
    assert artists['type'] == 1
    assert 'required' not in artists
    assert artists['options'][1]['choices'][0] == {'name': '4 weeks', 'value': 'short'}
