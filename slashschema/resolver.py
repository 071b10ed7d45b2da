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
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union

from .enums import PRIVATE_CHANNEL_TYPES, SUBCOMMAND_TYPES, ChannelType, CommandType, OptionType, try_enum
from .errors import (
    CommandNotFound,
    DisallowedChannelType,
    InvalidChoice,
    MissingRequiredOption,
    MultipleSubcommandsSelected,
    NoSubcommandSelected,
    NotAnInteger,
    NumberOutOfRange,
    StringLengthOutOfRange,
    TypeMismatch,
    UnresolvedReference,
)
from .models import User, UserArgument
from .namespace import Namespace, ResolvedTable
from .utils import is_integral, is_number, join_path

if TYPE_CHECKING:
    from .schema import CommandSchema, OptionSpec
    from .types.interactions import (
        ApplicationCommandInteractionData,
        ApplicationCommandInteractionDataOption,
        ResolvedData,
    )

    RawPayload = Union[Mapping[str, Any], List[ApplicationCommandInteractionDataOption]]
    Resolved = Union[ResolvedTable, ResolvedData, None]

__all__ = (
    'ResolvedCommand',
    'resolve',
    'resolve_command',
)


class ResolvedCommand(NamedTuple):
    """The outcome of :func:`resolve_command`.

    Attributes
    -----------
    schema: :class:`CommandSchema`
        The command that was invoked.
    path: Tuple[:class:`str`, ...]
        The names leading to the invoked (sub)command, starting with the command name,
        e.g. ``('top', 'artists')``.
    namespace: :class:`Namespace`
        The validated arguments.
    """

    schema: CommandSchema
    path: Tuple[str, ...]
    namespace: Namespace

    @property
    def qualified_name(self) -> str:
        """:class:`str`: The space separated path, e.g. ``'top artists'``."""
        return ' '.join(self.path)

    @property
    def arguments(self) -> Namespace:
        """:class:`Namespace`: The options of the invoked subcommand, or of the command itself."""
        namespace = self.namespace
        for name in self.path[1:]:
            namespace = namespace[name]
        return namespace


def _normalise(raw: Any, path: str) -> Mapping[str, Any]:
    if raw is None:
        return {}

    if isinstance(raw, Mapping):
        return raw

    if isinstance(raw, (list, tuple)):
        # Wire format, a list of {name, type, value} or {name, type, options} dicts
        result: Dict[str, Any] = {}
        for option in raw:
            if not isinstance(option, Mapping):
                continue
            name = option.get('name')
            if not isinstance(name, str):
                continue
            if option.get('type') in (1, 2) or 'options' in option:
                result[name] = option.get('options') or []
            else:
                result[name] = option.get('value')
        return result

    raise TypeMismatch(path, raw, OptionType.subcommand)


def _check_choices(option: OptionSpec, value: Any) -> Any:
    for choice in option.choices:
        if choice.matches(value):
            return value
    raise InvalidChoice(option.path, value, [choice.value for choice in option.choices])


def _check_range(option: OptionSpec, value: Union[int, float]) -> Union[int, float]:
    if option.choices:
        return _check_choices(option, value)

    if (option.min_value is not None and value < option.min_value) or (
        option.max_value is not None and value > option.max_value
    ):
        raise NumberOutOfRange(option.path, value, option.min_value, option.max_value)
    return value


def _convert_string(option: OptionSpec, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeMismatch(option.path, value, option.type)

    if option.choices:
        return _check_choices(option, value)

    length = len(value)
    if (option.min_length is not None and length < option.min_length) or (
        option.max_length is not None and length > option.max_length
    ):
        raise StringLengthOutOfRange(option.path, value, option.min_length, option.max_length)
    return value


def _convert_integer(option: OptionSpec, value: Any) -> int:
    if not is_number(value):
        raise TypeMismatch(option.path, value, option.type)

    if not is_integral(value):
        raise NotAnInteger(option.path, value)

    return _check_range(option, int(value))  # type: ignore # always an int here


def _convert_number(option: OptionSpec, value: Any) -> float:
    if not is_number(value):
        raise TypeMismatch(option.path, value, option.type)

    try:
        converted = float(value)
    except OverflowError:
        # integers past the float range
        raise NumberOutOfRange(option.path, value, option.min_value, option.max_value) from None

    if math.isnan(converted):
        raise TypeMismatch(option.path, value, option.type)

    return _check_range(option, converted)


def _convert_reference(option: OptionSpec, value: Any, resolved: ResolvedTable) -> Any:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TypeMismatch(option.path, value, option.type)

    found = resolved.get(option.type, value)
    if found is None:
        raise UnresolvedReference(option.path, value, option.type)

    if isinstance(found, User):
        found = UserArgument(user=found)

    if option.type is OptionType.channel:
        channel_type = getattr(found, 'type', None)
        if not isinstance(channel_type, ChannelType):
            channel_type = try_enum(ChannelType, channel_type)

        # Direct message channels are never valid, even without a channel type restriction
        if channel_type in PRIVATE_CHANNEL_TYPES:
            raise DisallowedChannelType(option.path, value, channel_type)

        if option.channel_types and channel_type not in option.channel_types:
            raise DisallowedChannelType(option.path, value, channel_type)

    return found


def _convert(option: OptionSpec, value: Any, resolved: ResolvedTable) -> Any:
    opt_type = option.type
    if opt_type is OptionType.string:
        return _convert_string(option, value)
    elif opt_type is OptionType.integer:
        return _convert_integer(option, value)
    elif opt_type is OptionType.number:
        return _convert_number(option, value)
    elif opt_type is OptionType.boolean:
        if not isinstance(value, bool):
            raise TypeMismatch(option.path, value, opt_type)
        return value
    else:
        return _convert_reference(option, value, resolved)


def _resolve_options(
    options: Mapping[str, OptionSpec],
    raw: Mapping[str, Any],
    parents: Tuple[str, ...],
    resolved: ResolvedTable,
) -> Tuple[Dict[str, Any], Tuple[str, ...]]:
    subcommands = [name for name, option in options.items() if option.type in SUBCOMMAND_TYPES]
    if subcommands:
        selected = [name for name in subcommands if raw.get(name) is not None]
        if len(selected) > 1:
            raise MultipleSubcommandsSelected(join_path(parents), selected)
        if not selected:
            raise NoSubcommandSelected(join_path(parents), subcommands)

    values: Dict[str, Any] = {}
    path: Tuple[str, ...] = ()
    for name, option in options.items():
        value = raw.get(name)
        if option.type in SUBCOMMAND_TYPES:
            if value is None:
                continue

            inner, path = _resolve_options(
                option.options,
                _normalise(value, option.path),
                parents + (name,),
                resolved,
            )
            values[name] = Namespace(inner)
            path = (name,) + path
        elif value is None:
            if option.required:
                raise MissingRequiredOption(option.path)
        else:
            values[name] = _convert(option, value, resolved)

    return values, path


def resolve(schema: CommandSchema, raw: RawPayload, resolved: Resolved = None) -> Namespace:
    """Validates a raw invocation payload against a command schema.

    The payload is walked depth first together with the schema, in the order the
    options were declared, and the first problem found is raised. Keys the schema
    does not know about are ignored and ``None`` values are treated as absent.

    This function is pure and can be called concurrently with the same schema.

    .. code-block:: python3

        ns = resolve(top, {'artists': {'range': 'short'}})
        assert as_dict(ns) == {'artists': {'range': 'short'}}

    Parameters
    -----------
    schema: :class:`CommandSchema`
        The command being invoked.
    raw: Union[Mapping[:class:`str`, Any], List[:class:`dict`]]
        The options of the invocation. Either a mapping of option names to values where
        a selected subcommand maps to its own mapping, or the list of option
        payloads that the gateway sends.
    resolved: Optional[Union[:class:`ResolvedTable`, :class:`dict`]]
        The objects that reference IDs in the payload point to, either as a
        :class:`ResolvedTable` or as the raw ``resolved`` payload.

    Raises
    -------
    ValidationError
        The payload does not satisfy the schema. The exception's ``path`` names the
        option that failed.

    Returns
    --------
    :class:`Namespace`
        The validated arguments.
    """

    table = ResolvedTable.coerce(resolved)
    values, _ = _resolve_options(schema.options, _normalise(raw, schema.name), (schema.name,), table)
    return Namespace(values)


def _resolve_target(schema: CommandSchema, data: ApplicationCommandInteractionData, table: ResolvedTable) -> Namespace:
    if schema.type is CommandType.user:
        key, option_type = 'user', OptionType.user
    else:
        key, option_type = 'message', None

    path = join_path([schema.name], key)
    target_id = data.get('target_id')
    if target_id is None:
        raise MissingRequiredOption(path)

    if option_type is None:
        found = table.get_message(target_id)
    else:
        found = table.get(option_type, target_id)
        if isinstance(found, User):
            found = UserArgument(user=found)

    if found is None:
        raise UnresolvedReference(path, target_id, option_type)
    return Namespace({key: found})


def resolve_command(
    schema: CommandSchema,
    data: ApplicationCommandInteractionData,
    resolved: Resolved = None,
) -> ResolvedCommand:
    """Validates the full interaction data of a command invocation.

    Unlike :func:`resolve` this also checks that the data is meant for ``schema``
    and reports which subcommand was selected. For user and message commands the
    namespace holds the target under ``user`` or ``message`` respectively.

    Parameters
    -----------
    schema: :class:`CommandSchema`
        The command being invoked.
    data: :class:`dict`
        The interaction data, holding the ``name``, ``type``, ``options``, ``resolved``
        and ``target_id`` keys.
    resolved: Optional[Union[:class:`ResolvedTable`, :class:`dict`]]
        Overrides the ``resolved`` key of ``data``.

    Raises
    -------
    CommandNotFound
        The data refers to a different command.
    ValidationError
        The payload does not satisfy the schema.

    Returns
    --------
    :class:`ResolvedCommand`
        The command, the selected subcommand path and the validated arguments.
    """

    name = data.get('name')
    command_type = try_enum(CommandType, data.get('type', CommandType.chat_input.value))
    if name != schema.name or command_type is not schema.type:
        raise CommandNotFound(str(name))

    table = ResolvedTable.coerce(resolved if resolved is not None else data.get('resolved'))
    if schema.type is not CommandType.chat_input:
        return ResolvedCommand(schema, (schema.name,), _resolve_target(schema, data, table))

    values, path = _resolve_options(
        schema.options,
        _normalise(data.get('options'), schema.name),
        (schema.name,),
        table,
    )
    return ResolvedCommand(schema, (schema.name,) + path, Namespace(values))
