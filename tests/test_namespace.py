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

import datetime

import pytest

from slashschema import (
    Attachment,
    Channel,
    ChannelType,
    Namespace,
    OptionType,
    ResolvedTable,
    Role,
    User,
    UserArgument,
    as_dict,
    define_command,
    resolve,
)
from slashschema.namespace import MESSAGE_KEY_TYPE, ResolveKey


def test_namespace_access():
    ns = Namespace({'range': 'short'}, user=None)

    assert ns.range == 'short'
    assert ns['range'] == 'short'
    assert 'range' in ns
    assert ns.missing is None
    assert 'missing' not in ns
    assert len(ns) == 2
    assert dict(ns) == {'range': 'short', 'user': None}

    with pytest.raises(KeyError):
        ns['missing']


def test_namespace_equality():
    assert Namespace({'a': 1}) == Namespace(a=1)
    assert Namespace({'a': 1}) != Namespace({'a': 2})
    assert Namespace() != {'a': 1}


def test_namespace_as_dict():
    ns = Namespace({'listeners': Namespace({'album': Namespace({'search': 'Blue'})})})
    assert as_dict(ns) == {'listeners': {'album': {'search': 'Blue'}}}
    assert repr(Namespace(a=1)) == '<Namespace a=1>'


@pytest.mark.parametrize('name', ['to_dict', 'as_dict', 'get', 'items'])
def test_namespace_option_names_do_not_shadow(name: str):
    schema = define_command(
        {
            'name': 'cmd',
            'description': 'A command',
            'options': {
                name: {
                    'type': 1,
                    'description': 'Sub',
                    'options': {name: {'type': 3, 'description': 'Text'}},
                },
            },
        }
    )

    ns = resolve(schema, {name: {name: 'value'}})
    assert getattr(getattr(ns, name), name) == 'value'
    assert as_dict(ns) == {name: {name: 'value'}}


def test_resolved_table_from_data():
    table = ResolvedTable.from_data(
        {
            'users': {'80088516616269824': {'id': '80088516616269824', 'username': 'danny'}},
            'members': {'80088516616269824': {'nick': 'Danny', 'roles': [], 'permissions': '8'}},
            'roles': {'381978264698224660': {'id': '381978264698224660', 'name': 'helpers'}},
            'channels': {
                '336642139381301249': {
                    'id': '336642139381301249',
                    'type': 11,
                    'name': 'thread',
                    'permissions': '0',
                    'parent_id': '336642776609456130',
                },
            },
            'attachments': {'1': {'id': '1', 'filename': 'a.txt'}},
            'messages': {'2': {'id': '2', 'channel_id': '336642139381301249'}},
        }
    )

    assert len(table) == 5
    assert ResolveKey('80088516616269824', OptionType.user.value) in table
    assert ResolveKey('2', MESSAGE_KEY_TYPE) in table

    user = table.get(OptionType.user, 80088516616269824)
    assert isinstance(user, UserArgument)
    assert user.display_name == 'Danny'
    assert user.member is not None and user.member.permissions == 8
    assert user.user.mention == '<@80088516616269824>'
    assert user.user.created_at.year == 2015
    assert user.user.created_at.tzinfo is datetime.timezone.utc

    role = table.get(OptionType.role, '381978264698224660')
    assert isinstance(role, Role)
    assert role.mention == '<@&381978264698224660>'

    channel = table.get(OptionType.channel, '336642139381301249')
    assert isinstance(channel, Channel)
    assert channel.type is ChannelType.public_thread
    assert channel.is_thread()
    assert channel.parent_id == 336642776609456130

    attachment = table.get(OptionType.attachment, 1)
    assert isinstance(attachment, Attachment)
    assert attachment.content_type is None

    message = table.get_message('2')
    assert message is not None
    assert message.author is None
    assert table.get(OptionType.channel, '2') is None


def test_resolved_table_add():
    table = ResolvedTable()
    table.add(OptionType.user, 1, User(data={'id': '1', 'username': 'a'}))
    table.add(OptionType.role, 2, Role(data={'id': '2', 'name': 'b'}))

    assert isinstance(table.get(OptionType.user, '1'), UserArgument)
    assert isinstance(table.get(OptionType.mentionable, '2'), Role)
    assert table.get(OptionType.role, '1') is None


def test_resolved_table_coerce():
    table = ResolvedTable()
    assert ResolvedTable.coerce(table) is table
    assert len(ResolvedTable.coerce(None)) == 0
    assert len(ResolvedTable.coerce({'roles': {'2': {'id': '2', 'name': 'b'}}})) == 1
