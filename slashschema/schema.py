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
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    FrozenSet,
    Generator,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from .enums import (
    CHOICE_TYPES,
    PRIVATE_CHANNEL_TYPES,
    SUBCOMMAND_TYPES,
    ChannelType,
    CommandType,
    OptionType,
    to_enum,
)
from .errors import (
    ChoiceTypeMismatch,
    DuplicateChoiceValue,
    DuplicateOptionName,
    IllegalConstraintForKind,
    InvalidChannelTypeForDM,
    InvalidNestingDepth,
    InvalidSchema,
)
from .models import Choice
from .utils import (
    MAX_CHOICE_NAME_LENGTH,
    MAX_CHOICES,
    MAX_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    MAX_OPTIONS,
    MAX_STRING_LENGTH,
    MISSING,
    is_integral,
    is_number,
    join_path,
    split_path,
    validate_name,
)

if TYPE_CHECKING:
    from .types.command import ApplicationCommand as ApplicationCommandPayload

__all__ = (
    'OptionSpec',
    'CommandSchema',
    'define_command',
    'lookup_subcommand_path',
)

Number = Union[int, float]

_EMPTY: Mapping[str, OptionSpec] = MappingProxyType({})

# constraint name -> option types that support it
_CONSTRAINTS: Dict[str, Tuple[OptionType, ...]] = {
    'choices': CHOICE_TYPES,
    'autocomplete': CHOICE_TYPES,
    'min_length': (OptionType.string,),
    'max_length': (OptionType.string,),
    'min_value': (OptionType.integer, OptionType.number),
    'max_value': (OptionType.integer, OptionType.number),
    'channel_types': (OptionType.channel,),
    'options': SUBCOMMAND_TYPES,
}


@dataclass(frozen=True)
class OptionSpec:
    """Represents a single option of a command schema.

    This is either a regular (leaf) option that carries a value, or a subcommand
    or subcommand group that holds other options.

    These should not be created manually, instead they are produced by :func:`define_command`
    which validates them first.

    Attributes
    -----------
    name: :class:`str`
        The name of the option.
    type: :class:`OptionType`
        The type of the option.
    description: :class:`str`
        The description of the option.
    path: :class:`str`
        The dotted path of the option starting at the command name, e.g. ``top.artists.range``.
    required: :class:`bool`
        Whether the option is required. Always ``False`` for subcommands and subcommand groups.
    choices: Tuple[:class:`Choice`, ...]
        The choices the value must be one of. Empty if the value is unrestricted.
    min_length: Optional[:class:`int`]
        The minimum length of a string option.
    max_length: Optional[:class:`int`]
        The maximum length of a string option.
    min_value: Optional[Union[:class:`int`, :class:`float`]]
        The minimum value of an integer or number option.
    max_value: Optional[Union[:class:`int`, :class:`float`]]
        The maximum value of an integer or number option.
    channel_types: FrozenSet[:class:`ChannelType`]
        The channel types a channel option accepts. Empty means every guild channel type.
    autocomplete: :class:`bool`
        Whether the option is filled in through autocomplete.
    options: Mapping[:class:`str`, :class:`OptionSpec`]
        The child options of a subcommand or subcommand group, in declaration order.
    """

    name: str
    type: OptionType
    description: str
    path: str
    required: bool = False
    choices: Tuple[Choice[Any], ...] = ()
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_value: Optional[Number] = None
    max_value: Optional[Number] = None
    channel_types: FrozenSet[ChannelType] = frozenset()
    autocomplete: bool = False
    options: Mapping[str, OptionSpec] = field(default_factory=lambda: _EMPTY, hash=False, repr=False)

    def is_leaf(self) -> bool:
        """:class:`bool`: Whether the option carries a value rather than other options."""
        return self.type not in SUBCOMMAND_TYPES

    def is_subcommand(self) -> bool:
        return self.type is OptionType.subcommand

    def is_group(self) -> bool:
        return self.type is OptionType.subcommand_group

    def get_option(self, name: str) -> Optional[OptionSpec]:
        return self.options.get(name)

    def to_dict(self) -> Dict[str, Any]:
        base: Dict[str, Any] = {
            'type': self.type.value,
            'name': self.name,
            'description': self.description,
        }

        if not self.is_leaf():
            base['options'] = [option.to_dict() for option in self.options.values()]
            return base

        base['required'] = self.required
        if self.choices:
            base['choices'] = [choice.to_dict() for choice in self.choices]
        if self.channel_types:
            base['channel_types'] = sorted(t.value for t in self.channel_types)
        if self.autocomplete:
            base['autocomplete'] = True

        for key in ('min_length', 'max_length', 'min_value', 'max_value'):
            value = getattr(self, key)
            if value is not None:
                base[key] = value

        return base


@dataclass(frozen=True)
class CommandSchema:
    """Represents a validated command definition.

    Schemas are immutable and only created through :func:`define_command`, so
    every schema that exists is structurally valid.

    Attributes
    -----------
    name: :class:`str`
        The name of the command.
    description: :class:`str`
        The description of the command. Empty for context menu commands.
    options: Mapping[:class:`str`, :class:`OptionSpec`]
        The top level options of the command, in declaration order.
    type: :class:`CommandType`
        The type of command.
    """

    name: str
    description: str
    options: Mapping[str, OptionSpec] = field(default_factory=lambda: _EMPTY, hash=False, repr=False)
    type: CommandType = CommandType.chat_input

    @property
    def subcommand_names(self) -> List[str]:
        """List[:class:`str`]: The names of the top level subcommands and subcommand groups."""
        return [name for name, option in self.options.items() if not option.is_leaf()]

    def has_subcommands(self) -> bool:
        return any(not option.is_leaf() for option in self.options.values())

    def get_option(self, path: Union[str, Sequence[str]]) -> Optional[OptionSpec]:
        """Retrieves an option by its path relative to the command.

        Parameters
        -----------
        path: Union[:class:`str`, Sequence[:class:`str`]]
            Either a dotted string such as ``'artists.range'`` or a sequence of names.

        Returns
        --------
        Optional[:class:`OptionSpec`]
            The option that was found or ``None``.
        """
        options = self.options
        found: Optional[OptionSpec] = None
        names = split_path(path)
        if not names:
            return None

        for name in names:
            found = options.get(name)
            if found is None:
                return None
            options = found.options
        return found

    def walk_options(self) -> Generator[OptionSpec, None, None]:
        """An iterator that recursively walks through all options, depth first and in declaration order.

        Yields
        ------
        :class:`OptionSpec`
            The options of this command.
        """

        def _walk(options: Mapping[str, OptionSpec]) -> Generator[OptionSpec, None, None]:
            for option in options.values():
                yield option
                yield from _walk(option.options)

        yield from _walk(self.options)

    def to_dict(self) -> ApplicationCommandPayload:
        """Returns the registration payload of the command."""
        base: Dict[str, Any] = {
            'name': self.name,
            'type': self.type.value,
            'description': self.description,
        }
        if self.type is CommandType.chat_input:
            base['options'] = [option.to_dict() for option in self.options.values()]
        return base  # type: ignore # Runtime dict is compatible with the TypedDict


def lookup_subcommand_path(schema: CommandSchema, path: Union[str, Sequence[str]]) -> Optional[OptionSpec]:
    """Walks the subcommand tree of ``schema`` following ``path``.

    The path may optionally start with the command's own name.

    Parameters
    -----------
    schema: :class:`CommandSchema`
        The command to look into.
    path: Union[:class:`str`, Sequence[:class:`str`]]
        The names of the subcommand group and subcommand, e.g. ``('listeners', 'album')``.

    Returns
    --------
    Optional[:class:`OptionSpec`]
        The subcommand or subcommand group found, or ``None`` if any step of the path
        is not a subcommand or subcommand group.
    """
    names = split_path(path)
    if names and names[0] == schema.name and names[0] not in schema.options:
        names = names[1:]

    if not names:
        return None

    options = schema.options
    found: Optional[OptionSpec] = None
    for name in names:
        found = options.get(name)
        if found is None or found.is_leaf():
            return None
        options = found.options
    return found


def _validate_name(name: Any, path: str) -> str:
    try:
        return validate_name(name)
    except ValueError as e:
        raise InvalidSchema(path, str(e)) from None


def _validate_description(description: Any, path: str) -> str:
    if not isinstance(description, str):
        raise InvalidSchema(path, 'description must be a string')

    if not 1 <= len(description) <= MAX_DESCRIPTION_LENGTH:
        raise InvalidSchema(path, f'description must be between 1-{MAX_DESCRIPTION_LENGTH} characters')
    return description


def _iter_definitions(data: Any, path: str) -> List[Tuple[str, Mapping[str, Any]]]:
    # Options can be given as a mapping of name -> definition, as (name, definition)
    # pairs or as a list of definitions that carry their own name like the wire format does.
    if data is None or data is MISSING:
        return []

    if isinstance(data, Mapping):
        items: Iterable[Any] = data.items()
    elif isinstance(data, (list, tuple)):
        items = data
    else:
        raise InvalidSchema(path, f'options must be a mapping or a list, not {data.__class__.__name__}')

    result: List[Tuple[str, Mapping[str, Any]]] = []
    seen = set()
    for item in items:
        if isinstance(item, Mapping):
            name, definition = item.get('name'), item
        elif isinstance(item, tuple) and len(item) == 2:
            name, definition = item
        else:
            raise InvalidSchema(path, f'invalid option definition {item!r}')

        if not isinstance(definition, Mapping):
            raise InvalidSchema(join_path([path], str(name)), 'option definitions must be mappings')

        name = _validate_name(name, join_path([path], str(name)))
        if name in seen:
            raise DuplicateOptionName(path, name)

        seen.add(name)
        result.append((name, definition))

    if len(result) > MAX_OPTIONS:
        raise InvalidSchema(path, f'cannot have more than {MAX_OPTIONS} options')
    return result


def _is_set(definition: Mapping[str, Any], key: str) -> bool:
    return definition.get(key) is not None


def _validate_length(value: Any, key: str, path: str, minimum: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise IllegalConstraintForKind(path, key, f'{key} must be an integer')

    if not minimum <= value <= MAX_STRING_LENGTH:
        raise IllegalConstraintForKind(path, key, f'{key} must be between {minimum} and {MAX_STRING_LENGTH}')
    return value


def _validate_bound(value: Any, key: str, path: str, type: OptionType) -> Number:
    if not is_number(value):
        raise IllegalConstraintForKind(path, key, f'{key} must be a number')

    if isinstance(value, float) and not math.isfinite(value):
        raise IllegalConstraintForKind(path, key, f'{key} must be a finite number')

    if type is OptionType.integer:
        if not is_integral(value):
            raise IllegalConstraintForKind(path, key, f'{key} must be a whole number for integer options')
        return int(value)
    return value


def _build_choices(data: Any, path: str, type: OptionType) -> Tuple[Choice[Any], ...]:
    if not isinstance(data, (list, tuple)):
        raise InvalidSchema(path, 'choices must be a list of Choice')

    if len(data) > MAX_CHOICES:
        raise InvalidSchema(path, f'cannot have more than {MAX_CHOICES} choices')

    choices: List[Choice[Any]] = []
    values = set()
    for item in data:
        if isinstance(item, Mapping):
            try:
                choice = Choice.from_dict(item)  # type: ignore # Shape is checked below
            except KeyError:
                raise InvalidSchema(path, 'choices require both a name and a value') from None
        elif isinstance(item, Choice):
            choice = item
        else:
            raise InvalidSchema(path, 'choices must be a list of Choice')

        if not isinstance(choice.name, str) or not 1 <= len(choice.name) <= MAX_CHOICE_NAME_LENGTH:
            raise InvalidSchema(path, f'choice names must be between 1-{MAX_CHOICE_NAME_LENGTH} characters')

        if not choice.accepts(type):
            raise ChoiceTypeMismatch(path, choice.value, type)

        if choice.value in values:
            raise DuplicateChoiceValue(path, choice.value)

        values.add(choice.value)
        choices.append(choice)

    return tuple(choices)


def _build_channel_types(data: Any, path: str) -> FrozenSet[ChannelType]:
    if isinstance(data, (str, int)) or not isinstance(data, Iterable):
        raise InvalidSchema(path, 'channel_types must be a list of ChannelType')

    result = set()
    for item in data:
        try:
            channel_type = to_enum(ChannelType, item)
        except ValueError as e:
            raise InvalidSchema(path, str(e)) from None

        if channel_type in PRIVATE_CHANNEL_TYPES:
            raise InvalidChannelTypeForDM(path, channel_type)
        result.add(channel_type)

    return frozenset(result)


def _build_option(name: str, definition: Mapping[str, Any], parents: Tuple[str, ...], parent: Optional[OptionType]) -> OptionSpec:
    path = join_path(parents, name)

    try:
        type = to_enum(OptionType, definition.get('type'))
    except ValueError as e:
        raise InvalidSchema(path, str(e)) from None

    if parent is OptionType.subcommand_group and type is not OptionType.subcommand:
        raise InvalidNestingDepth(path, f'subcommand groups can only contain subcommands, not {type.name} options')

    if parent is OptionType.subcommand and type in SUBCOMMAND_TYPES:
        raise InvalidNestingDepth(path, f'a {type.name.replace("_", " ")} cannot be nested inside a subcommand')

    description = _validate_description(definition.get('description'), path)

    for key, supported in _CONSTRAINTS.items():
        if _is_set(definition, key) and type not in supported:
            raise IllegalConstraintForKind(path, key, f'{key} is not supported for {type.name} options')

    if type in SUBCOMMAND_TYPES:
        options = _build_options(definition.get('options'), parents + (name,), type)
        if type is OptionType.subcommand_group and not options:
            raise InvalidSchema(path, 'subcommand groups must contain at least one subcommand')
        return OptionSpec(name=name, type=type, description=description, path=path, options=options)

    required = definition.get('required', False)
    if not isinstance(required, bool):
        raise InvalidSchema(path, 'required must be a bool')

    choices: Tuple[Choice[Any], ...] = ()
    if _is_set(definition, 'choices'):
        choices = _build_choices(definition['choices'], path, type)

    autocomplete = definition.get('autocomplete') or False
    if not isinstance(autocomplete, bool):
        raise InvalidSchema(path, 'autocomplete must be a bool')

    if autocomplete and choices:
        raise InvalidSchema(path, 'autocomplete cannot be used together with choices')

    min_length = max_length = None
    if _is_set(definition, 'min_length'):
        min_length = _validate_length(definition['min_length'], 'min_length', path, 0)
    if _is_set(definition, 'max_length'):
        max_length = _validate_length(definition['max_length'], 'max_length', path, 1)
    if min_length is not None and max_length is not None and min_length > max_length:
        raise IllegalConstraintForKind(path, 'min_length', 'min_length cannot be larger than max_length')

    min_value = max_value = None
    if _is_set(definition, 'min_value'):
        min_value = _validate_bound(definition['min_value'], 'min_value', path, type)
    if _is_set(definition, 'max_value'):
        max_value = _validate_bound(definition['max_value'], 'max_value', path, type)
    if min_value is not None and max_value is not None and min_value > max_value:
        raise IllegalConstraintForKind(path, 'min_value', 'min_value cannot be larger than max_value')

    channel_types: FrozenSet[ChannelType] = frozenset()
    if _is_set(definition, 'channel_types'):
        channel_types = _build_channel_types(definition['channel_types'], path)

    return OptionSpec(
        name=name,
        type=type,
        description=description,
        path=path,
        required=required,
        choices=choices,
        min_length=min_length,
        max_length=max_length,
        min_value=min_value,
        max_value=max_value,
        channel_types=channel_types,
        autocomplete=autocomplete,
    )


def _build_options(data: Any, parents: Tuple[str, ...], parent: Optional[OptionType]) -> Mapping[str, OptionSpec]:
    path = join_path(parents)
    options = {
        name: _build_option(name, definition, parents, parent) for name, definition in _iter_definitions(data, path)
    }

    leaves = [option for option in options.values() if option.is_leaf()]
    if leaves and len(leaves) != len(options):
        raise InvalidNestingDepth(path, 'subcommands and subcommand groups cannot be mixed with other options')

    return MappingProxyType(options)


def define_command(data: Union[Mapping[str, Any], CommandSchema]) -> CommandSchema:
    """Builds a :class:`CommandSchema` from a declarative command definition.

    The definition is validated eagerly and completely. If anything about it is
    wrong then a :exc:`SchemaError` is raised and no schema is created.

    .. code-block:: python3

        top = define_command({
            'name': 'top',
            'description': 'Look at top statistics',
            'options': {
                'artists': {
                    'type': OptionType.subcommand,
                    'description': 'See your top artists',
                    'options': {
                        'user': {'type': OptionType.user, 'description': 'The user to look up'},
                        'range': {
                            'type': OptionType.string,
                            'description': 'The range to look at',
                            'choices': [Choice(name='4 weeks', value='short')],
                        },
                    },
                },
            },
        })

    Parameters
    -----------
    data: Mapping[:class:`str`, Any]
        The command definition. It requires a ``name`` and, for chat input commands,
        a ``description``. ``options`` maps option names to option definitions which
        may use an :class:`OptionType`, its value or its name as their ``type``.
        If a :class:`CommandSchema` is passed it is returned as-is.

    Raises
    -------
    InvalidSchema
        A name, description or other field breaks the protocol limits.
    DuplicateOptionName
        The same option name was used twice on one level.
    InvalidNestingDepth
        Subcommands or subcommand groups were nested in an unsupported way, or
        mixed with other options on the same level.
    ChoiceTypeMismatch
        A choice value does not match the type of its option.
    DuplicateChoiceValue
        Two choices of one option have the same value.
    IllegalConstraintForKind
        A constraint was used on an option type that does not support it.
    InvalidChannelTypeForDM
        A channel option allows direct message channels.

    Returns
    --------
    :class:`CommandSchema`
        The validated schema.
    """

    if isinstance(data, CommandSchema):
        return data

    if not isinstance(data, Mapping):
        raise InvalidSchema('', f'command definitions must be mappings, not {data.__class__.__name__}')

    raw_name = data.get('name')
    try:
        type = to_enum(CommandType, data.get('type') or CommandType.chat_input)
    except ValueError as e:
        raise InvalidSchema(str(raw_name or ''), str(e)) from None

    if type is not CommandType.chat_input:
        # context menu names are free form
        if not isinstance(raw_name, str) or not 1 <= len(raw_name) <= MAX_NAME_LENGTH:
            raise InvalidSchema(str(raw_name or ''), f'context menu names must be between 1-{MAX_NAME_LENGTH} characters')

        if _is_set(data, 'options'):
            raise InvalidSchema(raw_name, 'context menu commands cannot have options')
        return CommandSchema(name=raw_name, description='', type=type)

    name = _validate_name(raw_name, str(raw_name or ''))
    description = _validate_description(data.get('description'), name)
    options = _build_options(data.get('options'), (name,), None)
    return CommandSchema(name=name, description=description, options=options, type=type)
