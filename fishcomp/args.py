import sys, typing

from .common              import FishcompException
from .cli.commands        import FISHCOMP_CLI_SCHEMA
from .cli.argparse_gen    import generate_parser


def parse(argv: typing.List[str] = None) -> dict:
    parser, subparsers = generate_parser(FISHCOMP_CLI_SCHEMA)

    args: dict = vars(parser.parse_args(argv))

    if args.get("command") is None:
        parser.print_help()
        sys.exit(1)

    # Aliases arrive as typed; dispatch works on canonical names
    args["command"] = FISHCOMP_CLI_SCHEMA.get_command(args["command"]).name

    if args["command"] == "completion" and args.get("completion") is None:
        subparsers["completion"].print_help()
        sys.exit(1)

    return args


def print_help(path: typing.List[str]):
    """Print the help text of the command at path (the root when empty)."""
    parser, subparsers = generate_parser(FISHCOMP_CLI_SCHEMA)

    if not path:
        parser.print_help()
        return

    cmd = FISHCOMP_CLI_SCHEMA.root.find(path)
    subparser = None
    if cmd is not None:
        subparser = subparsers.get(cmd.command_path().split(" ", 1)[1])

    if subparser is None:
        raise FishcompException(f"Unknown command '{' '.join(path)}'. Run fishcomp --help to list commands.")

    subparser.print_help()


def help():  # pylint: disable=redefined-builtin
    from .state import ARG  # pylint: disable=import-outside-toplevel

    print_help(ARG("subcommand"))
