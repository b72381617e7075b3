"""
Command Tree Dataclass Definitions.

This module defines the dataclasses used to describe a command hierarchy:
commands, their flags, and the flag views each command exposes. These
definitions are the input to the fish completion generator and to the
argparse generator used by fishcomp's own CLI.

Commands own their subcommands. The parent link is a non-owning
back-reference used to reconstruct command paths and to resolve inherited
(persistent) flags; it is set by Command.add_command() and never compared
or printed.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from ..common import FishcompException
from . import errors


# Deepest allowed command, counted in parents above it (the root is at
# depth 0). A longer chain can only come from a cycle or a corrupted tree.
MAX_COMMAND_DEPTH = 64

_WHITESPACE = re.compile(r"\s")

# Command names end up inside fish function names and single-quoted
# conditions, so only characters fish reads literally are allowed.
NAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.:+-]*$")


class FlagType(Enum):
    """Value kinds a flag can carry."""
    BOOL = "bool"
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    DURATION = "duration"
    STRING_LIST = "string-list"
    COUNT = "count"


# Value kinds that never consume the following token
_NO_VALUE_TYPES = (FlagType.BOOL, FlagType.COUNT)


@dataclass
class Flag:  # pylint: disable=too-many-instance-attributes
    """
    Definition of a single command-line flag (--name / -s).
    """
    # Identity
    name: str                           # Long form without dashes (e.g., "output")
    short: Optional[str] = None         # Single character without dash (e.g., "o")

    help: str = ""
    type: FlagType = FlagType.STRING
    default: Any = None
    metavar: Optional[str] = None

    # Completion policy
    hidden: bool = False
    deprecated: Optional[str] = None    # Deprecation message; set means deprecated

    def __post_init__(self):
        if not self.name or _WHITESPACE.search(self.name) or self.name.startswith("-"):
            raise FishcompException(errors.identifier_error(
                f"--{self.name}", "name", "must be non-empty, without whitespace or leading dashes", self.name))
        if self.short is not None and (len(self.short) != 1 or self.short in "- \t"):
            raise FishcompException(errors.identifier_error(
                f"--{self.name}", "short", "must be a single character", self.short))

    def takes_value(self) -> bool:
        """Whether the shell must expect an argument after this flag."""
        return self.type not in _NO_VALUE_TYPES

    def is_completable(self) -> bool:
        """Hidden and deprecated flags are never offered for completion."""
        return not self.hidden and not self.deprecated

    def get_flags(self) -> List[str]:
        """Return the flag strings, short form first."""
        flags = []
        if self.short:
            flags.append(f"-{self.short}")
        flags.append(f"--{self.name}")
        return flags

    def get_dest(self) -> str:
        """Return the attribute name argparse stores this flag under."""
        return self.name.replace("-", "_")


class FlagSet:
    """
    An ordered set of flags with unique names and shorthands.

    Iteration yields flags sorted by name when sort_flags is set, and in
    insertion order otherwise.
    """

    def __init__(self, flags: Iterable[Flag] = (), sort_flags: bool = True):
        self.sort_flags = sort_flags
        self._flags: Dict[str, Flag] = {}
        for flag in flags:
            self.add(flag)

    def add(self, flag: Flag) -> Flag:
        if flag.name in self._flags:
            raise FishcompException(errors.duplicate_error("flag set", "flag", flag.name))
        if flag.short is not None and self.lookup_short(flag.short) is not None:
            raise FishcompException(errors.duplicate_error("flag set", "shorthand", flag.short))
        self._flags[flag.name] = flag
        return flag

    def lookup(self, name: str) -> Optional[Flag]:
        return self._flags.get(name)

    def lookup_short(self, short: str) -> Optional[Flag]:
        for flag in self._flags.values():
            if flag.short == short:
                return flag
        return None

    def names(self) -> List[str]:
        return [flag.name for flag in self]

    def __contains__(self, name: str) -> bool:
        return name in self._flags

    def __len__(self) -> int:
        return len(self._flags)

    def __iter__(self) -> Iterator[Flag]:
        if self.sort_flags:
            return iter([self._flags[name] for name in sorted(self._flags)])
        return iter(list(self._flags.values()))

    def __repr__(self) -> str:
        return f"FlagSet({self.names()!r})"


@dataclass
class Positional:
    """Definition of a positional argument. Only argparse generation reads these."""
    name: str                           # Metavar and destination
    help: str = ""
    nargs: Optional[Union[str, int]] = None


@dataclass(eq=False)
class Command:  # pylint: disable=too-many-instance-attributes
    """
    Definition of a command or subcommand.

    Commands compare by identity: two separately built commands with the same
    fields are still different nodes of (possibly) different trees.
    """
    # Identity
    name: str
    help: str = ""                      # Short description, used as the completion hint
    description: Optional[str] = None   # Long description for --help output
    aliases: List[str] = field(default_factory=list)

    # Availability
    hidden: bool = False
    deprecated: Optional[str] = None

    # Arguments. flags are local to this command, persistent_flags are
    # also inherited by every descendant.
    positionals: List[Positional] = field(default_factory=list)
    flags: FlagSet = field(default_factory=FlagSet)
    persistent_flags: FlagSet = field(default_factory=FlagSet)

    # Tree links
    subcommands: List["Command"] = field(default_factory=list)
    parent: Optional["Command"] = field(default=None, init=False, repr=False)
    help_command: Optional["Command"] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.name, str) or not NAME_PATTERN.match(self.name):
            raise FishcompException(errors.identifier_error(
                self.name, "name",
                "must start with a letter, digit or '_' and contain only [A-Za-z0-9_.:+-]", self.name))

        if not isinstance(self.flags, FlagSet):
            self.flags = FlagSet(self.flags)
        if not isinstance(self.persistent_flags, FlagSet):
            self.persistent_flags = FlagSet(self.persistent_flags)

        for name in self.flags.names():
            if name in self.persistent_flags:
                raise FishcompException(errors.duplicate_error(self.name, "flag", name))

        children, self.subcommands = self.subcommands, []
        self.add_command(*children)

    # =========================================================================
    # Tree construction
    # =========================================================================

    def add_command(self, *cmds: "Command") -> None:
        """Attach cmds as children, in order, and point their parent here."""
        for cmd in cmds:
            if cmd is self:
                raise FishcompException(f"{errors.format_name(self.name)} cannot be its own subcommand")
            if cmd.parent is not None:
                raise FishcompException(
                    f"{errors.format_name(cmd.name)} is already a subcommand of "
                    f"{errors.format_name(cmd.parent.command_path())}")

            taken = set()
            for sibling in self.subcommands:
                taken.add(sibling.name)
                taken.update(sibling.aliases)
            for name in [cmd.name] + cmd.aliases:
                if name in taken:
                    raise FishcompException(errors.duplicate_error(self.command_path(), "subcommand", name))

            cmd.parent = self
            self.subcommands.append(cmd)

    def add_flag(self, flag: Flag, persistent: bool = False) -> Flag:
        """Declare a flag on this command."""
        other = self.flags if persistent else self.persistent_flags
        if flag.name in other:
            raise FishcompException(errors.duplicate_error(self.command_path(), "flag", flag.name))
        if persistent:
            return self.persistent_flags.add(flag)
        return self.flags.add(flag)

    def set_help_command(self, cmd: Optional["Command"] = None) -> "Command":
        """
        Attach the help pseudo-command. It stays a regular child for argument
        parsing but is skipped by every completion generator.
        """
        if cmd is None:
            cmd = Command(
                name="help",
                help="Help about any command",
                positionals=[Positional(name="subcommand", nargs="*", help="Command to show help for.")],
            )
        self.add_command(cmd)
        self.help_command = cmd
        return cmd

    # =========================================================================
    # Tree queries
    # =========================================================================

    def ancestors(self) -> Iterator["Command"]:
        """Yield the parent, grandparent, ... up to and including the root."""
        current = self.parent
        for _ in range(MAX_COMMAND_DEPTH):
            if current is None:
                return
            yield current
            current = current.parent
        if current is None:
            return
        raise FishcompException(
            f"{errors.format_name(self.name)} is nested deeper than {MAX_COMMAND_DEPTH} levels "
            "(is there a cycle in the command tree?)")

    def root(self) -> "Command":
        root = self
        for root in self.ancestors():
            pass
        return root

    def is_root(self) -> bool:
        return self.parent is None

    def command_path(self) -> str:
        """Full space-separated path from the root, root included."""
        names = [self.name] + [cmd.name for cmd in self.ancestors()]
        return " ".join(reversed(names))

    def is_available(self) -> bool:
        return not self.hidden and not self.deprecated

    def available_subcommands(self) -> List["Command"]:
        """Children in declared order, minus the help command and unavailable ones."""
        return [
            cmd for cmd in self.subcommands
            if cmd.is_available() and cmd is not self.help_command
        ]

    def find(self, path: List[str]) -> Optional["Command"]:
        """Locate a descendant by a list of names or aliases."""
        current = self
        for name in path:
            current = next(
                (cmd for cmd in current.subcommands if cmd.name == name or name in cmd.aliases),
                None
            )
            if current is None:
                return None
        return current

    # =========================================================================
    # Flag views
    # =========================================================================

    def local_non_persistent_flags(self) -> FlagSet:
        """Flags declared on this command that descendants do not inherit."""
        return self.flags

    def non_inherited_flags(self) -> FlagSet:
        """Every flag declared on this command, persistent or not."""
        result = FlagSet(sort_flags=self.flags.sort_flags)
        for flag in self.flags:
            result.add(flag)
        for flag in self.persistent_flags:
            result.add(flag)
        return result

    def inherited_flags(self) -> FlagSet:
        """
        Persistent flags of every ancestor, nearest ancestor first. A flag
        shadowed by one of this command's own flags, or by a nearer ancestor,
        is left out.
        """
        own = self.non_inherited_flags()
        result = FlagSet(sort_flags=self.flags.sort_flags)
        for ancestor in self.ancestors():
            for flag in ancestor.persistent_flags:
                if flag.name in own or flag.name in result:
                    continue
                if flag.short is not None and own.lookup_short(flag.short) is not None:
                    raise FishcompException(errors.duplicate_error(self.command_path(), "shorthand", flag.short))
                result.add(flag)
        return result

    def all_flags(self) -> FlagSet:
        """Every flag usable on this command."""
        result = self.non_inherited_flags()
        for flag in self.inherited_flags():
            result.add(flag)
        return result


@dataclass
class CLISchema:
    """
    A program's command tree plus the metadata needed to build its parser.
    """
    root: Command
    description: str = ""

    @property
    def prog(self) -> str:
        return self.root.name

    def get_command(self, name: str) -> Optional[Command]:
        """Get a top-level command by name or alias."""
        return self.root.find([name])

    def get_all_command_names(self) -> List[str]:
        """Get all top-level command names and aliases."""
        names = []
        for cmd in self.root.available_subcommands():
            names.append(cmd.name)
            names.extend(cmd.aliases)
        return names
