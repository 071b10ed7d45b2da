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

import pytest

from slashschema import ChannelType, CommandType, OptionType
from slashschema.enums import to_enum, try_enum


def test_enum_lookup():
    assert OptionType(3) is OptionType.string
    assert OptionType['mentionable'] is OptionType.mentionable
    assert len(CommandType) == 3
    assert [t.value for t in OptionType] == list(range(1, 12))
    assert str(ChannelType.news) == 'news'

    with pytest.raises(ValueError):
        OptionType(12)

    with pytest.raises(TypeError):
        OptionType.string = 4  # type: ignore


def test_try_enum():
    assert try_enum(ChannelType, 0) is ChannelType.text

    unknown = try_enum(ChannelType, 99)
    assert unknown.name == 'unknown_99'
    assert unknown.value == 99
    assert isinstance(unknown, ChannelType)
    assert unknown not in (ChannelType.text, ChannelType.private)


@pytest.mark.parametrize('value', [OptionType.user, 6, 'user'])
def test_to_enum(value):
    assert to_enum(OptionType, value) is OptionType.user


@pytest.mark.parametrize('value', [True, 0, 'User', None, 6.5])
def test_to_enum_invalid(value):
    with pytest.raises(ValueError):
        to_enum(OptionType, value)
