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
from typing import TYPE_CHECKING, Any, Dict, Generic, NamedTuple, Optional, TypeVar, Union

from .enums import ChannelType, OptionType, try_enum
from .utils import _get_as_snowflake, is_number, snowflake_time

if TYPE_CHECKING:
    from .types.command import ApplicationCommandOptionChoice
    from .types.interactions import (
        PartialChannel as PartialChannelPayload,
        PartialThread as PartialThreadPayload,
    )
    from .types.member import Member as MemberPayload
    from .types.message import Attachment as AttachmentPayload, Message as MessagePayload
    from .types.role import Role as RolePayload
    from .types.user import User as UserPayload

__all__ = (
    'Choice',
    'User',
    'Member',
    'UserArgument',
    'Role',
    'Channel',
    'Attachment',
    'Message',
)

ChoiceT = TypeVar('ChoiceT', str, int, float, Union[str, int, float])


class _Hashable:
    __slots__ = ()

    id: int

    def __eq__(self, other: object) -> bool:
        return isinstance(other, self.__class__) and other.id == self.id

    def __hash__(self) -> int:
        return self.id >> 22

    @property
    def created_at(self) -> datetime.datetime:
        """:class:`datetime.datetime`: Returns the creation time in UTC."""
        return snowflake_time(self.id)


class Choice(Generic[ChoiceT]):
    """Represents an option choice.

    .. container:: operations

        .. describe:: x == y

            Checks if two choices are equal.

        .. describe:: x != y

            Checks if two choices are not equal.

        .. describe:: hash(x)

            Returns the choice's hash.

    Parameters
    -----------
    name: :class:`str`
        The name of the choice. Used for display purposes.
    value: Union[:class:`int`, :class:`str`, :class:`float`]
        The value of the choice.
    """

    __slots__ = ('name', 'value')

    def __init__(self, *, name: str, value: ChoiceT):
        self.name: str = name
        self.value: ChoiceT = value

    @classmethod
    def from_dict(cls, data: ApplicationCommandOptionChoice) -> Choice[ChoiceT]:
        return cls(name=data['name'], value=data['value'])  # type: ignore # the value type is checked by the schema

    def __eq__(self, o: object) -> bool:
        return isinstance(o, Choice) and self.name == o.name and self.value == o.value

    def __hash__(self) -> int:
        return hash((self.name, self.value))

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(name={self.name!r}, value={self.value!r})'

    def accepts(self, type: OptionType) -> bool:
        """Checks whether the choice value is usable in an option of the given type."""
        if type is OptionType.string:
            return isinstance(self.value, str)
        if type is OptionType.integer:
            return isinstance(self.value, int) and not isinstance(self.value, bool)
        if type is OptionType.number:
            return is_number(self.value)
        return False

    def matches(self, value: Any) -> bool:
        """Checks whether a converted option value is exactly this choice's value.

        Unlike ``==`` this does not consider ``True`` and ``1`` to be the same value.
        """
        if isinstance(value, bool) or isinstance(self.value, bool):
            return False
        if isinstance(self.value, str) or isinstance(value, str):
            return isinstance(self.value, str) and isinstance(value, str) and self.value == value
        return self.value == value

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'value': self.value,
        }


class User(_Hashable):
    """Represents a resolved user.

    Attributes
    -----------
    id: :class:`int`
        The user's ID.
    name: :class:`str`
        The user's username.
    global_name: Optional[:class:`str`]
        The user's display name, if set.
    bot: :class:`bool`
        Whether the user is a bot account.
    """

    __slots__ = ('id', 'name', 'global_name', 'bot')

    def __init__(self, *, data: UserPayload) -> None:
        self.id: int = int(data['id'])
        self.name: str = data['username']
        self.global_name: Optional[str] = data.get('global_name')
        self.bot: bool = data.get('bot', False)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} id={self.id} name={self.name!r} bot={self.bot}>'

    @property
    def display_name(self) -> str:
        """:class:`str`: Returns the user's display name, falling back to the username."""
        return self.global_name or self.name

    @property
    def mention(self) -> str:
        """:class:`str`: Returns a string that allows you to mention the given user."""
        return f'<@{self.id}>'


class Member(_Hashable):
    """Represents the guild specific data of a resolved user.

    Attributes
    -----------
    id: :class:`int`
        The ID of the user this member data belongs to.
    nick: Optional[:class:`str`]
        The guild specific nickname of the user.
    roles: Tuple[:class:`int`, ...]
        The IDs of the roles the member has.
    permissions: Optional[:class:`int`]
        The raw permission value of the member in the invoking channel, if given.
    """

    __slots__ = ('id', 'nick', 'roles', 'permissions')

    def __init__(self, *, id: int, data: MemberPayload) -> None:
        self.id: int = id
        self.nick: Optional[str] = data.get('nick')
        self.roles = tuple(int(r) for r in data.get('roles', []))
        permissions = data.get('permissions')
        self.permissions: Optional[int] = int(permissions) if permissions is not None else None

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} id={self.id} nick={self.nick!r}>'


class UserArgument(NamedTuple):
    """The value of a resolved user option.

    ``member`` is only available when the command was invoked inside a guild.
    """

    user: User
    member: Optional[Member] = None

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def display_name(self) -> str:
        """:class:`str`: The guild nickname if available, otherwise the user's display name."""
        if self.member is not None and self.member.nick:
            return self.member.nick
        return self.user.display_name


class Role(_Hashable):
    """Represents a resolved role.

    Attributes
    -----------
    id: :class:`int`
        The ID of the role.
    name: :class:`str`
        The name of the role.
    position: :class:`int`
        The position of the role in the hierarchy.
    mentionable: :class:`bool`
        Whether the role can be mentioned by users.
    """

    __slots__ = ('id', 'name', 'position', 'mentionable', 'managed')

    def __init__(self, *, data: RolePayload) -> None:
        self.id: int = int(data['id'])
        self.name: str = data['name']
        self.position: int = data.get('position', 0)
        self.mentionable: bool = data.get('mentionable', False)
        self.managed: bool = data.get('managed', False)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} id={self.id} name={self.name!r}>'

    @property
    def mention(self) -> str:
        """:class:`str`: Returns a string that allows you to mention a role."""
        return f'<@&{self.id}>'


class Channel(_Hashable):
    """Represents a partially resolved channel or thread.

    Attributes
    -----------
    id: :class:`int`
        The ID of the channel.
    type: :class:`ChannelType`
        The type of channel.
    name: :class:`str`
        The name of the channel.
    permissions: :class:`int`
        The raw resolved permissions of the invoking user in that channel.
    parent_id: Optional[:class:`int`]
        The parent category, or the parent channel for threads.
    """

    __slots__ = ('id', 'type', 'name', 'permissions', 'parent_id')

    def __init__(self, *, data: Union[PartialChannelPayload, PartialThreadPayload]) -> None:
        self.id: int = int(data['id'])
        self.type: ChannelType = try_enum(ChannelType, data['type'])
        self.name: str = data.get('name') or ''
        self.permissions: int = int(data.get('permissions', 0))
        self.parent_id: Optional[int] = _get_as_snowflake(data, 'parent_id')

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} id={self.id!r} name={self.name!r} type={self.type!r}>'

    @property
    def mention(self) -> str:
        """:class:`str`: The string that allows you to mention the channel."""
        return f'<#{self.id}>'

    def is_thread(self) -> bool:
        """:class:`bool`: Whether the channel is a thread."""
        return self.type in (ChannelType.news_thread, ChannelType.public_thread, ChannelType.private_thread)


class Attachment(_Hashable):
    """Represents a resolved attachment.

    Attributes
    ------------
    id: :class:`int`
        The attachment ID.
    filename: :class:`str`
        The attachment's filename.
    size: :class:`int`
        The attachment size in bytes.
    url: :class:`str`
        The attachment URL.
    content_type: Optional[:class:`str`]
        The attachment's media type.
    """

    __slots__ = ('id', 'filename', 'size', 'url', 'content_type')

    def __init__(self, *, data: AttachmentPayload) -> None:
        self.id: int = int(data['id'])
        self.filename: str = data['filename']
        self.size: int = data.get('size', 0)
        self.url: str = data.get('url', '')
        self.content_type: Optional[str] = data.get('content_type')

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} id={self.id} filename={self.filename!r}>'


class Message(_Hashable):
    """Represents the target message of a message command.

    Attributes
    -----------
    id: :class:`int`
        The message ID.
    channel_id: :class:`int`
        The ID of the channel the message was sent in.
    content: :class:`str`
        The content of the message.
    author: Optional[:class:`User`]
        The author of the message, if sent.
    """

    __slots__ = ('id', 'channel_id', 'content', 'author')

    def __init__(self, *, data: MessagePayload) -> None:
        self.id: int = int(data['id'])
        self.channel_id: int = int(data['channel_id'])
        self.content: str = data.get('content', '')
        author = data.get('author')
        self.author: Optional[User] = User(data=author) if author is not None else None

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} id={self.id} channel_id={self.channel_id} author={self.author!r}>'
