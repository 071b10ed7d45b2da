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

from typing import Any, Optional, Sequence, Union, TYPE_CHECKING

from .utils import MISSING, _human_join

if TYPE_CHECKING:
    from .enums import ChannelType, OptionType

__all__ = (
    'SlashSchemaException',
    'SchemaError',
    'InvalidSchema',
    'DuplicateOptionName',
    'InvalidNestingDepth',
    'ChoiceTypeMismatch',
    'DuplicateChoiceValue',
    'IllegalConstraintForKind',
    'InvalidChannelTypeForDM',
    'ValidationError',
    'MissingRequiredOption',
    'InvalidChoice',
    'StringLengthOutOfRange',
    'NumberOutOfRange',
    'NotAnInteger',
    'TypeMismatch',
    'UnresolvedReference',
    'DisallowedChannelType',
    'MultipleSubcommandsSelected',
    'NoSubcommandSelected',
    'CommandNotFound',
    'CommandAlreadyRegistered',
)


class SlashSchemaException(Exception):
    """Base exception class for slashschema.

    Ideally speaking, this could be caught to handle any exceptions raised from this library.
    """

    __slots__ = ()


class SchemaError(SlashSchemaException):
    """The base exception for a command definition that is structurally invalid.

    These are raised by :func:`define_command` while a schema is being built and
    indicate a programming error. A schema is never produced when one is raised.

    This inherits from :exc:`SlashSchemaException`.

    Attributes
    -----------
    path: :class:`str`
        The dotted path of the offending command or option, e.g. ``top.artists.range``.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path: str = path
        super().__init__(f'{path}: {message}' if path else message)

    @property
    def kind(self) -> str:
        """:class:`str`: The name of the error kind, e.g. ``'DuplicateOptionName'``."""
        return self.__class__.__name__


class InvalidSchema(SchemaError):
    """An exception raised when a definition breaks one of the protocol limits,
    such as a malformed name, an empty description or too many options.

    This inherits from :exc:`SchemaError`.
    """

    pass


class DuplicateOptionName(SchemaError):
    """An exception raised when the same option name is used twice on one level.

    This inherits from :exc:`SchemaError`.

    Attributes
    -----------
    name: :class:`str`
        The duplicated name.
    """

    def __init__(self, path: str, name: str) -> None:
        self.name: str = name
        super().__init__(path, f'option {name!r} is already defined')


class InvalidNestingDepth(SchemaError):
    """An exception raised when subcommands or subcommand groups are nested in a way
    that is not supported. Groups may only hold subcommands and subcommands may only hold
    regular options.

    This inherits from :exc:`SchemaError`.
    """

    pass


class ChoiceTypeMismatch(SchemaError):
    """An exception raised when a choice value does not have the type of its option.

    This inherits from :exc:`SchemaError`.

    Attributes
    -----------
    value: Any
        The offending choice value.
    type: :class:`OptionType`
        The type of the option the choice belongs to.
    """

    def __init__(self, path: str, value: Any, type: OptionType) -> None:
        self.value: Any = value
        self.type: OptionType = type
        super().__init__(
            path, f'choice value {value!r} ({value.__class__.__name__}) does not match the {type.name} option type'
        )


class DuplicateChoiceValue(SchemaError):
    """An exception raised when two choices of the same option share a value.

    This inherits from :exc:`SchemaError`.

    Attributes
    -----------
    value: Any
        The duplicated value.
    """

    def __init__(self, path: str, value: Any) -> None:
        self.value: Any = value
        super().__init__(path, f'choice value {value!r} is used more than once')


class IllegalConstraintForKind(SchemaError):
    """An exception raised when an option declares a constraint its type does not support,
    e.g. ``min_length`` on a user option, or declares contradicting bounds.

    This inherits from :exc:`SchemaError`.

    Attributes
    -----------
    constraint: :class:`str`
        The name of the offending constraint.
    """

    def __init__(self, path: str, constraint: str, message: str) -> None:
        self.constraint: str = constraint
        super().__init__(path, message)


class InvalidChannelTypeForDM(IllegalConstraintForKind):
    """An exception raised when a channel option allows direct message channel types.

    This inherits from :exc:`IllegalConstraintForKind`.

    Attributes
    -----------
    channel_type: :class:`ChannelType`
        The disallowed channel type.
    """

    def __init__(self, path: str, channel_type: ChannelType) -> None:
        self.channel_type: ChannelType = channel_type
        super().__init__(path, 'channel_types', f'channel options cannot accept {channel_type} channels')


class ValidationError(SlashSchemaException):
    """The base exception for an invocation payload that does not satisfy its command schema.

    These are raised by :func:`resolve` and are meant to be reported back to the
    user who invoked the command.

    This inherits from :exc:`SlashSchemaException`.

    Attributes
    -----------
    path: :class:`str`
        The dotted path of the option that failed, e.g. ``top.artists.range``.
    value: Any
        The raw value that failed validation, if any.
    message: :class:`str`
        A human readable description of the failure.
    """

    def __init__(self, path: str, message: str, *, value: Any = MISSING) -> None:
        self.path: str = path
        self.value: Any = value
        self.message: str = message
        super().__init__(message)

    @property
    def kind(self) -> str:
        """:class:`str`: The name of the error kind, e.g. ``'InvalidChoice'``."""
        return self.__class__.__name__


class MissingRequiredOption(ValidationError):
    """An exception raised when a required option was not supplied.

    This inherits from :exc:`ValidationError`.
    """

    def __init__(self, path: str) -> None:
        super().__init__(path, f'{path!r} is a required option that is missing.')


class InvalidChoice(ValidationError):
    """An exception raised when a value is not one of the option's choices.

    This inherits from :exc:`ValidationError`.

    Attributes
    -----------
    choices: List[Union[:class:`str`, :class:`int`, :class:`float`]]
        The values that would have been accepted.
    """

    def __init__(self, path: str, value: Any, choices: Sequence[Union[str, int, float]]) -> None:
        self.choices = list(choices)
        fmt = _human_join([repr(c) for c in self.choices])
        super().__init__(path, f'{_display(value)} is not a valid choice for {path!r}, expected {fmt}.', value=value)


class StringLengthOutOfRange(ValidationError):
    """An exception raised when a string is shorter or longer than allowed.

    This inherits from :exc:`ValidationError`.

    Attributes
    -----------
    min_length: Optional[:class:`int`]
        The minimum length, if any.
    max_length: Optional[:class:`int`]
        The maximum length, if any.
    """

    def __init__(self, path: str, value: str, min_length: Optional[int], max_length: Optional[int]) -> None:
        self.min_length: Optional[int] = min_length
        self.max_length: Optional[int] = max_length
        super().__init__(path, f'{path!r} must be {_describe_range(min_length, max_length)} characters long.', value=value)


class NumberOutOfRange(ValidationError):
    """An exception raised when a number is outside of its option's bounds.

    This inherits from :exc:`ValidationError`.

    Attributes
    -----------
    min_value: Optional[Union[:class:`int`, :class:`float`]]
        The minimum value, if any.
    max_value: Optional[Union[:class:`int`, :class:`float`]]
        The maximum value, if any.
    """

    def __init__(
        self,
        path: str,
        value: Union[int, float],
        min_value: Optional[Union[int, float]],
        max_value: Optional[Union[int, float]],
    ) -> None:
        self.min_value: Optional[Union[int, float]] = min_value
        self.max_value: Optional[Union[int, float]] = max_value
        super().__init__(path, f'{path!r} must be {_describe_range(min_value, max_value)}, got {_display(value)}.', value=value)


class NotAnInteger(ValidationError):
    """An exception raised when an integer option receives a number with a fractional part.

    This inherits from :exc:`ValidationError`.
    """

    def __init__(self, path: str, value: Any) -> None:
        super().__init__(path, f'{path!r} must be a whole number, got {_display(value)}.', value=value)


class TypeMismatch(ValidationError):
    """An exception raised when a raw value does not have the shape its option type requires.

    This inherits from :exc:`ValidationError`.

    Attributes
    -----------
    type: :class:`OptionType`
        The type of the option.
    """

    def __init__(self, path: str, value: Any, type: OptionType) -> None:
        self.type: OptionType = type
        # subcommand and subcommand group
        expected = 'a mapping of options' if type.value in (1, 2) else f'a {type.name} value'
        super().__init__(path, f'{path!r} expects {expected}, received {value.__class__.__name__} instead.', value=value)


class UnresolvedReference(ValidationError):
    """An exception raised when a reference ID is not present in the resolved data.

    This inherits from :exc:`ValidationError`.

    Attributes
    -----------
    type: Optional[:class:`OptionType`]
        The type of the option, or ``None`` for the target of a message command.
    """

    def __init__(self, path: str, value: Any, type: Optional[OptionType]) -> None:
        self.type: Optional[OptionType] = type
        kind = type.name if type is not None else 'message'
        super().__init__(path, f'could not resolve {kind} {_display(value)} for {path!r}.', value=value)


class DisallowedChannelType(ValidationError):
    """An exception raised when a channel option resolves to a channel of a type it does not accept.

    Direct message channels are never accepted.

    This inherits from :exc:`ValidationError`.

    Attributes
    -----------
    channel_type: :class:`ChannelType`
        The type of the resolved channel.
    """

    def __init__(self, path: str, value: Any, channel_type: ChannelType) -> None:
        self.channel_type: ChannelType = channel_type
        super().__init__(path, f'{path!r} does not accept {channel_type} channels.', value=value)


class MultipleSubcommandsSelected(ValidationError):
    """An exception raised when a payload selects more than one subcommand on the same level.

    This inherits from :exc:`ValidationError`.

    Attributes
    -----------
    selected: List[:class:`str`]
        The names that were selected, in declaration order.
    """

    def __init__(self, path: str, selected: Sequence[str]) -> None:
        self.selected = list(selected)
        fmt = _human_join([repr(name) for name in self.selected], final='and')
        super().__init__(path, f'only one subcommand of {path!r} can be used at a time, received {fmt}.')


class NoSubcommandSelected(ValidationError):
    """An exception raised when a command with subcommands is invoked without selecting one.

    This inherits from :exc:`ValidationError`.

    Attributes
    -----------
    available: List[:class:`str`]
        The subcommands that could have been selected.
    """

    def __init__(self, path: str, available: Sequence[str]) -> None:
        self.available = list(available)
        fmt = _human_join([repr(name) for name in self.available])
        super().__init__(path, f'{path!r} requires a subcommand, expected {fmt}.')


class CommandNotFound(SlashSchemaException):
    """An exception raised when an invocation refers to a command that is not known.

    This inherits from :exc:`SlashSchemaException`.

    Attributes
    ------------
    name: :class:`str`
        The name of the command not found.
    """

    def __init__(self, name: str) -> None:
        self.name: str = name
        super().__init__(f'Command {name!r} not found')


class CommandAlreadyRegistered(SlashSchemaException):
    """An exception raised when a command is already registered.

    This inherits from :exc:`SlashSchemaException`.

    Attributes
    -----------
    name: :class:`str`
        The name of the command already registered.
    """

    def __init__(self, name: str) -> None:
        self.name: str = name
        super().__init__(f'Command {name!r} already registered.')


def _display(value: Any) -> str:
    try:
        text = repr(value)
    except ValueError:
        # int refuses to render more digits than sys.get_int_max_str_digits()
        return f'<{value.__class__.__name__} too large to display>'

    if len(text) > 100:
        return text[:97] + '...'
    return text


def _describe_range(minimum: Any, maximum: Any) -> str:
    if minimum is not None and maximum is not None:
        return f'between {minimum} and {maximum}'
    if minimum is not None:
        return f'at least {minimum}'
    return f'at most {maximum}'
