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
import math
import re
from typing import Any, Iterable, Optional, Sequence, Tuple, Union

__all__ = (
    'MISSING',
    'snowflake_time',
    'validate_name',
    'join_path',
)

DISCORD_EPOCH = 1420070400000

MAX_OPTIONS = 25
MAX_CHOICES = 25
MAX_NAME_LENGTH = 32
MAX_DESCRIPTION_LENGTH = 100
MAX_CHOICE_NAME_LENGTH = 100
MAX_STRING_LENGTH = 6000

# The re module doesn't support \p{} so we have to list characters from Thai and Devanagari manually.
THAI_COMBINING = r'\u0e31-\u0e3a\u0e47-\u0e4e'
DEVANAGARI_COMBINING = r'\u0900-\u0903\u093a\u093b\u093c\u093e\u093f\u0940-\u094f\u0955\u0956\u0957\u0962\u0963'
VALID_SLASH_COMMAND_NAME = re.compile(r'^[-_\w' + THAI_COMBINING + DEVANAGARI_COMBINING + r']{1,32}$')


class _MissingSentinel:
    __slots__ = ()

    def __eq__(self, other):
        return False

    def __bool__(self):
        return False

    def __hash__(self):
        return 0

    def __repr__(self):
        return '...'


MISSING: Any = _MissingSentinel()


def snowflake_time(id: int, /) -> datetime.datetime:
    """Returns the creation time of the given snowflake.

    Parameters
    -----------
    id: :class:`int`
        The snowflake ID.

    Returns
    --------
    :class:`datetime.datetime`
        An aware datetime in UTC representing the creation time of the snowflake.
    """
    timestamp = ((id >> 22) + DISCORD_EPOCH) / 1000
    return datetime.datetime.fromtimestamp(timestamp, tz=datetime.timezone.utc)


def _get_as_snowflake(data: Any, key: str) -> Optional[int]:
    try:
        value = data[key]
    except KeyError:
        return None
    else:
        return value and int(value)


def _human_join(seq: Sequence[str], /, *, delimiter: str = ', ', final: str = 'or') -> str:
    size = len(seq)
    if size == 0:
        return ''

    if size == 1:
        return seq[0]

    if size == 2:
        return f'{seq[0]} {final} {seq[1]}'

    return delimiter.join(seq[:-1]) + f' {final} {seq[-1]}'


def validate_name(name: str) -> str:
    """Checks that ``name`` is usable as a command or option name.

    Raises :exc:`ValueError` with a human readable reason otherwise.
    """
    if not isinstance(name, str):
        raise ValueError(f'names must be strings not {name.__class__.__name__}')

    match = VALID_SLASH_COMMAND_NAME.match(name)
    if match is None:
        raise ValueError(
            f'{name!r} must be between 1-32 characters and contain only lower-case letters, numbers, hyphens, or underscores.'
        )

    # Ideally, name.islower() would work instead but since certain characters
    # are Lo (e.g. CJK) those don't pass the test.
    if name.lower() != name:
        raise ValueError(f'{name!r} must be all lower-case')
    return name


def join_path(parents: Iterable[str], name: Optional[str] = None) -> str:
    path = list(parents)
    if name is not None:
        path.append(name)
    return '.'.join(path)


def split_path(path: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    if isinstance(path, str):
        return tuple(part for part in path.split('.') if part)
    return tuple(path)


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid numeric option value
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integral(value: Union[int, float]) -> bool:
    if isinstance(value, int):
        return True
    return math.isfinite(value) and value.is_integer()
