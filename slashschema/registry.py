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
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .enums import CommandType, try_enum
from .errors import CommandAlreadyRegistered, CommandNotFound, SchemaError
from .resolver import ResolvedCommand, resolve_command
from .schema import CommandSchema, define_command

if TYPE_CHECKING:
    from .namespace import ResolvedTable
    from .types.command import ApplicationCommand as ApplicationCommandPayload
    from .types.interactions import ApplicationCommandInteractionData, ResolvedData

__all__ = ('CommandRegistry',)

_log = logging.getLogger(__name__)


class CommandRegistry:
    """Represents a container that holds the command schemas of a process.

    Commands are keyed by their name and type, so a chat input command and a
    context menu command may share a name.

    The registry is meant to be filled once at start-up. Registration is not
    thread-safe, but looking up and resolving commands afterwards is.

    .. container:: operations

        .. describe:: len(x)

            Returns the number of registered commands.

        .. describe:: name in x

            Checks if a chat input command with that name is registered.

        .. describe:: iter(x)

            Returns an iterator of the registered :class:`CommandSchema`.
    """

    def __init__(self) -> None:
        self._commands: Dict[Tuple[str, int], CommandSchema] = {}

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} commands={len(self._commands)}>'

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and (name, CommandType.chat_input.value) in self._commands

    def __iter__(self) -> Iterator[CommandSchema]:
        return iter(self._commands.values())

    def add_command(self, command: CommandSchema, /, *, override: bool = False) -> None:
        """Adds a command schema to the registry.

        Parameters
        -----------
        command: :class:`CommandSchema`
            The command to add.
        override: :class:`bool`
            Whether to override a command with the same name and type. If ``False``
            an exception is raised. Default is ``False``.

        Raises
        --------
        CommandAlreadyRegistered
            The command was already registered and no override was specified.
        TypeError
            The object passed is not a :class:`CommandSchema`.
        """

        if not isinstance(command, CommandSchema):
            raise TypeError(f'Expected a CommandSchema, received {command.__class__!r} instead')

        key = (command.name, command.type.value)
        if not override and key in self._commands:
            raise CommandAlreadyRegistered(command.name)

        self._commands[key] = command
        _log.debug('Registered %s command %r.', command.type.name, command.name)

    def define(self, data: Union[Mapping[str, Any], CommandSchema], /, *, override: bool = False) -> CommandSchema:
        """Builds a command with :func:`define_command` and adds it to the registry.

        Raises
        --------
        SchemaError
            The definition is invalid. Nothing is registered.
        CommandAlreadyRegistered
            The command was already registered and no override was specified.

        Returns
        --------
        :class:`CommandSchema`
            The registered command.
        """
        command = define_command(data)
        self.add_command(command, override=override)
        return command

    def load(self, definitions: Iterable[Union[Mapping[str, Any], CommandSchema]], /) -> List[SchemaError]:
        """Defines and registers many commands at once.

        An invalid definition only prevents that command from being registered,
        the error is logged and the remaining definitions are still loaded.

        Parameters
        -----------
        definitions: Iterable[Mapping[:class:`str`, Any]]
            The command definitions to load.

        Raises
        --------
        CommandAlreadyRegistered
            Two definitions share a name and type.

        Returns
        --------
        List[:exc:`SchemaError`]
            The errors of the definitions that were rejected.
        """
        failed: List[SchemaError] = []
        for data in definitions:
            try:
                self.define(data)
            except SchemaError as e:
                name = data.get('name') if isinstance(data, Mapping) else None
                _log.error('Ignoring invalid definition for command %r', name, exc_info=e)
                failed.append(e)

        return failed

    def remove_command(self, name: str, /, *, type: CommandType = CommandType.chat_input) -> Optional[CommandSchema]:
        """Removes a command from the registry.

        Returns
        --------
        Optional[:class:`CommandSchema`]
            The command that was removed. If nothing was removed
            then ``None`` is returned instead.
        """
        return self._commands.pop((name, type.value), None)

    def get_command(self, name: str, /, *, type: CommandType = CommandType.chat_input) -> Optional[CommandSchema]:
        """Gets a command from the registry.

        Returns
        --------
        Optional[:class:`CommandSchema`]
            The command that was found. If nothing was found
            then ``None`` is returned instead.
        """
        return self._commands.get((name, type.value))

    def get_commands(self, *, type: Optional[CommandType] = None) -> List[CommandSchema]:
        """Gets all registered commands, optionally only those of the given type."""
        if type is None:
            return list(self._commands.values())
        return [command for command in self._commands.values() if command.type is type]

    def clear_commands(self) -> None:
        self._commands.clear()

    def to_payload(self) -> List[ApplicationCommandPayload]:
        """Returns the registration payloads of all registered commands."""
        return [command.to_dict() for command in self._commands.values()]

    def resolve(
        self,
        data: ApplicationCommandInteractionData,
        resolved: Union[ResolvedTable, ResolvedData, None] = None,
    ) -> ResolvedCommand:
        """Finds the invoked command and validates its arguments.

        Parameters
        -----------
        data: :class:`dict`
            The interaction data of the invocation.
        resolved: Optional[Union[:class:`ResolvedTable`, :class:`dict`]]
            Overrides the ``resolved`` key of ``data``.

        Raises
        -------
        CommandNotFound
            No command with that name and type is registered.
        ValidationError
            The payload does not satisfy the command's schema.

        Returns
        --------
        :class:`ResolvedCommand`
            The command, the selected subcommand path and the validated arguments.
        """
        name = data.get('name')
        type = try_enum(CommandType, data.get('type', CommandType.chat_input.value))
        command = self._commands.get((name, type.value))  # type: ignore # name is checked below
        if command is None:
            raise CommandNotFound(str(name))

        return resolve_command(command, data, resolved)
