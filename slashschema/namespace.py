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

from typing import TYPE_CHECKING, Any, Dict, Iterator, Mapping, NamedTuple, Optional, Tuple, Union

from .enums import OptionType
from .models import Attachment, Channel, Member, Message, Role, User, UserArgument
from .types.interactions import ResolvedData

if TYPE_CHECKING:
    from .types.snowflake import Snowflake

__all__ = (
    'Namespace',
    'ResolvedTable',
    'as_dict',
)

# Option types do not use 0 so it is safe to use internally for message targets.
MESSAGE_KEY_TYPE = 0


def _is_snowflake(id: Any) -> bool:
    # snowflakes are unsigned 64 bit integers, larger ints are never present
    if isinstance(id, int):
        return 0 <= id < 1 << 64
    return True


class ResolveKey(NamedTuple):
    id: str
    type: int

    @classmethod
    def from_option(cls, id: Snowflake, type: Union[OptionType, int]) -> ResolveKey:
        return cls(id=str(id), type=type if isinstance(type, int) else type.value)


class ResolvedTable:
    """A lookup table of the objects that reference IDs in a payload point to.

    Hosts either build one from the ``resolved`` payload that accompanies an
    invocation through :meth:`from_data`, or fill one in themselves with :meth:`add`.

    .. container:: operations

        .. describe:: len(x)

            Returns the number of entries.

        .. describe:: key in x

            Checks if a :class:`ResolveKey` is in the table.
    """

    __slots__ = ('_items',)

    def __init__(self, items: Optional[Mapping[ResolveKey, Any]] = None) -> None:
        self._items: Dict[ResolveKey, Any] = dict(items) if items else {}

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} entries={len(self._items)}>'

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    @classmethod
    def from_data(cls, resolved: ResolvedData) -> ResolvedTable:
        """Builds a table from the ``resolved`` payload of an invocation."""
        completed: Dict[ResolveKey, Any] = {}
        members = resolved.get('members', {})
        type = OptionType.user.value
        for user_id, user_data in resolved.get('users', {}).items():
            user = User(data=user_data)
            member_data = members.get(user_id)
            member = Member(id=user.id, data=member_data) if member_data is not None else None
            completed[ResolveKey(id=str(user_id), type=type)] = UserArgument(user=user, member=member)

        type = OptionType.role.value
        completed.update(
            {
                ResolveKey(id=str(role_id), type=type): Role(data=role_data)
                for role_id, role_data in resolved.get('roles', {}).items()
            }
        )

        type = OptionType.channel.value
        completed.update(
            {
                ResolveKey(id=str(channel_id), type=type): Channel(data=channel_data)
                for channel_id, channel_data in resolved.get('channels', {}).items()
            }
        )

        type = OptionType.attachment.value
        completed.update(
            {
                ResolveKey(id=str(attachment_id), type=type): Attachment(data=attachment_data)
                for attachment_id, attachment_data in resolved.get('attachments', {}).items()
            }
        )

        completed.update(
            {
                ResolveKey(id=str(message_id), type=MESSAGE_KEY_TYPE): Message(data=message_data)
                for message_id, message_data in resolved.get('messages', {}).items()
            }
        )
        return cls(completed)

    @classmethod
    def coerce(cls, resolved: Union[ResolvedTable, ResolvedData, None]) -> ResolvedTable:
        if resolved is None:
            return cls()
        if isinstance(resolved, cls):
            return resolved
        return cls.from_data(resolved)

    def add(self, type: OptionType, id: Snowflake, value: Any) -> None:
        """Adds an entry to the table.

        Parameters
        -----------
        type: :class:`OptionType`
            The kind of object, one of :attr:`OptionType.user`, :attr:`OptionType.role`,
            :attr:`OptionType.channel` or :attr:`OptionType.attachment`.
            Mentionable options look up both users and roles.
        id: Union[:class:`str`, :class:`int`]
            The reference ID.
        value: Any
            The object the ID refers to. A :class:`User` is wrapped into a :class:`UserArgument`.
        """
        if type is OptionType.user and isinstance(value, User):
            value = UserArgument(user=value)
        self._items[ResolveKey.from_option(id, type)] = value

    def add_message(self, id: Snowflake, message: Message) -> None:
        """Adds the target message of a message command."""
        self._items[ResolveKey(id=str(id), type=MESSAGE_KEY_TYPE)] = message

    def get(self, type: OptionType, id: Snowflake) -> Optional[Any]:
        """Looks up the object for a reference ID, returning ``None`` if it is not present."""
        if not _is_snowflake(id):
            return None

        if type is OptionType.mentionable:
            # Mentionable is User | Role, users take precedence if both exist
            found = self._items.get(ResolveKey.from_option(id, OptionType.user))
            if found is None:
                found = self._items.get(ResolveKey.from_option(id, OptionType.role))
            return found
        return self._items.get(ResolveKey.from_option(id, type))

    def get_message(self, id: Snowflake) -> Optional[Message]:
        if not _is_snowflake(id):
            return None
        return self._items.get(ResolveKey(id=str(id), type=MESSAGE_KEY_TYPE))


class Namespace:
    """An object that holds the validated arguments of an invocation.

    This class is deliberately simple and just holds the option name and resolved value as a simple
    key-pair mapping. These attributes can be accessed using dot notation. For example, an option
    with the name of ``example`` can be accessed using ``ns.example``. If an attribute is not found,
    then ``None`` is returned rather than an attribute error.

    Only options that were required or supplied are present, so ``'name' in ns`` tells whether
    an optional option was given. A selected subcommand or subcommand group is stored as
    a nested :class:`Namespace` under its own name. :func:`as_dict` converts the whole
    tree into plain dicts.

    .. container:: operations

        .. describe:: x == y

            Checks if two namespaces are equal by checking if all attributes are equal.
        .. describe:: x != y

            Checks if two namespaces are not equal.
        .. describe:: x[key]

            Returns an attribute if it is found, otherwise raises
            a :exc:`KeyError`.
        .. describe:: key in x

            Checks if the attribute is in the namespace.
        .. describe:: iter(x)

           Returns an iterator of ``(name, value)`` pairs. This allows it
           to be, for example, constructed as a dict or a list of pairs.
        .. describe:: len(x)

           Returns the number of attributes.

    Consult the table below for the value of each option type.

    +-----------------------------------+---------------------------------------------+
    |            Option Type            |                 Value Type                  |
    +===================================+=============================================+
    | :attr:`OptionType.string`         | :class:`str`                                |
    +-----------------------------------+---------------------------------------------+
    | :attr:`OptionType.integer`        | :class:`int`                                |
    +-----------------------------------+---------------------------------------------+
    | :attr:`OptionType.boolean`        | :class:`bool`                               |
    +-----------------------------------+---------------------------------------------+
    | :attr:`OptionType.number`         | :class:`float`                              |
    +-----------------------------------+---------------------------------------------+
    | :attr:`OptionType.user`           | :class:`UserArgument`                       |
    +-----------------------------------+---------------------------------------------+
    | :attr:`OptionType.channel`        | :class:`Channel`                            |
    +-----------------------------------+---------------------------------------------+
    | :attr:`OptionType.role`           | :class:`Role`                               |
    +-----------------------------------+---------------------------------------------+
    | :attr:`OptionType.mentionable`    | :class:`UserArgument` or :class:`Role`      |
    +-----------------------------------+---------------------------------------------+
    | :attr:`OptionType.attachment`     | :class:`Attachment`                         |
    +-----------------------------------+---------------------------------------------+
    | :attr:`OptionType.subcommand`     | :class:`Namespace`                          |
    +-----------------------------------+---------------------------------------------+
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None, /, **kwargs: Any) -> None:
        if values:
            self.__dict__.update(values)
        self.__dict__.update(kwargs)

    def __repr__(self) -> str:
        items = (f'{k}={v!r}' for k, v in self.__dict__.items())
        return '<{} {}>'.format(self.__class__.__name__, ' '.join(items))

    def __eq__(self, other: object) -> bool:
        if isinstance(self, Namespace) and isinstance(other, Namespace):
            return self.__dict__ == other.__dict__
        return NotImplemented

    def __getitem__(self, key: str) -> Any:
        return self.__dict__[key]

    def __contains__(self, key: str) -> Any:
        return key in self.__dict__

    def __getattr__(self, attr: str) -> Any:
        return None

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        yield from self.__dict__.items()

    def __len__(self) -> int:
        return len(self.__dict__)



def as_dict(namespace: Namespace, /) -> Dict[str, Any]:
    """Returns the arguments of a :class:`Namespace` as a plain :class:`dict`.

    Nested namespaces of subcommands and subcommand groups are converted as well.

    Parameters
    -----------
    namespace: :class:`Namespace`
        The namespace to convert.

    Returns
    --------
    Dict[:class:`str`, Any]
        The converted arguments.
    """
    return {key: as_dict(value) if isinstance(value, Namespace) else value for key, value in namespace}
