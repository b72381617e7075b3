"""
Load command trees from YAML definitions.

A definition file describes the root command; nested commands go under
`commands`. Example:

    name: app
    help: Example application
    help_command: true
    persistent_flags:
      - {name: verbose, short: v, type: bool, help: Verbose output}
    commands:
      - name: build
        help: Build the project
        flags:
          - {name: output, short: o, type: string, help: output path}

Every name ends up verbatim in the generated fish script (the root name is
part of function names), so names are restricted to characters fish reads
literally.
"""

from typing import Any, Dict, List, Optional

from ..common import FishcompException, file_load_yaml
from . import errors
from .schema import NAME_PATTERN, Command, Flag, FlagSet, FlagType



_FLAG_KEYS = {"name", "short", "help", "type", "default", "metavar", "hidden", "deprecated"}
_COMMAND_KEYS = {
    "name", "help", "description", "aliases", "hidden", "deprecated",
    "flags", "persistent_flags", "commands",
}
_ROOT_KEYS = _COMMAND_KEYS | {"help_command", "sort_flags"}

FLAG_TYPE_NAMES = [t.value for t in FlagType]


def _check_mapping(where: str, data: Any, allowed: set) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise FishcompException(errors.type_error(where, "definition", "a mapping", data))

    unknown = [key for key in data if key not in allowed]
    if unknown:
        raise FishcompException(errors.unknown_keys_error(where, unknown, list(allowed)))

    return data


def _get_str(where: str, data: Dict[str, Any], key: str, required: bool = False) -> Optional[str]:
    value = data.get(key)
    if value is None:
        if required:
            raise FishcompException(errors.missing_error(where, key))
        return None
    if not isinstance(value, str):
        raise FishcompException(errors.type_error(where, key, "a string", value))
    return value


def _get_bool(where: str, data: Dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise FishcompException(errors.type_error(where, key, "true or false", value))
    return value


def _get_list(where: str, data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise FishcompException(errors.type_error(where, key, "a list", value))
    return value


def _get_deprecated(where: str, data: Dict[str, Any]) -> Optional[str]:
    """`deprecated` may be a message or a plain true/false."""
    value = data.get("deprecated")
    if value is None or value is False:
        return None
    if value is True:
        return "deprecated"
    if not isinstance(value, str):
        raise FishcompException(errors.type_error(where, "deprecated", "a string or true/false", value))
    return value


def _check_name(where: str, field: str, name: str) -> str:
    if not NAME_PATTERN.match(name):
        raise FishcompException(errors.identifier_error(
            where, field, "must start with a letter, digit or '_' and contain only [A-Za-z0-9_.:+-]", name))
    return name


def _load_flag(cmd_path: str, data: Any) -> Flag:
    _check_mapping(f"{cmd_path} flag", data, _FLAG_KEYS)
    name = _check_name(f"{cmd_path} flag", "name", _get_str(f"{cmd_path} flag", data, "name", required=True))
    where = f"{cmd_path} --{name}"

    type_name = _get_str(where, data, "type") or FlagType.STRING.value
    if type_name not in FLAG_TYPE_NAMES:
        raise FishcompException(errors.choices_error(where, "type", FLAG_TYPE_NAMES, type_name))

    short = data.get("short")
    if short is not None and not (isinstance(short, str) and len(short) == 1 and NAME_PATTERN.match(short)):
        raise FishcompException(errors.identifier_error(where, "short", "must be a single letter or digit", short))

    return Flag(
        name=name,
        short=short,
        help=_get_str(where, data, "help") or "",
        type=FlagType(type_name),
        default=data.get("default"),
        metavar=_get_str(where, data, "metavar"),
        hidden=_get_bool(where, data, "hidden"),
        deprecated=_get_deprecated(where, data),
    )


def _load_flags(cmd_path: str, items: List[Any], sort_flags: bool) -> FlagSet:
    flags = FlagSet(sort_flags=sort_flags)
    for item in items:
        flag = _load_flag(cmd_path, item)
        if flag.name in flags:
            raise FishcompException(errors.duplicate_error(cmd_path, "flag", flag.name))
        if flag.short is not None and flags.lookup_short(flag.short) is not None:
            raise FishcompException(errors.duplicate_error(cmd_path, "shorthand", flag.short))
        flags.add(flag)
    return flags


def _load_command(parent_path: Optional[str], data: Any, allowed: set, sort_flags: bool) -> Command:
    where = parent_path or "<root>"
    _check_mapping(where, data, allowed)
    name = _check_name(where, "name", _get_str(where, data, "name", required=True))
    path = f"{parent_path} {name}" if parent_path else name

    aliases = [_check_name(path, "alias", alias) for alias in _get_list(path, data, "aliases")]

    flags = _load_flags(path, _get_list(path, data, "flags"), sort_flags)
    persistent_flags = _load_flags(path, _get_list(path, data, "persistent_flags"), sort_flags)
    for flag_name in flags.names():
        if flag_name in persistent_flags:
            raise FishcompException(errors.duplicate_error(path, "flag", flag_name))

    subcommands = [
        _load_command(path, item, _COMMAND_KEYS, sort_flags)
        for item in _get_list(path, data, "commands")
    ]

    return Command(
        name=name,
        help=_get_str(path, data, "help") or "",
        description=_get_str(path, data, "description"),
        aliases=aliases,
        hidden=_get_bool(path, data, "hidden"),
        deprecated=_get_deprecated(path, data),
        flags=flags,
        persistent_flags=persistent_flags,
        subcommands=subcommands,
    )


def load_command_tree(data: Any) -> Command:
    """Build a command tree from an already parsed definition."""
    _check_mapping("<root>", data, _ROOT_KEYS)
    sort_flags = data.get("sort_flags", True)
    if not isinstance(sort_flags, bool):
        raise FishcompException(errors.type_error("<root>", "sort_flags", "true or false", sort_flags))

    root = _load_command(None, data, _ROOT_KEYS, sort_flags)
    if _get_bool(root.name, data, "help_command"):
        root.set_help_command()

    return root


def load_command_tree_file(filepath: str) -> Command:
    """Build a command tree from a YAML definition file."""
    data = file_load_yaml(filepath)
    if data is None:
        raise FishcompException(f'"{filepath}" is empty')

    return load_command_tree(data)
