"""
fishcomp CLI Command Definitions - SINGLE SOURCE OF TRUTH

The tool's own command line is declared here as a command tree. It is used
to build the argparse parser (cli/argparse_gen.py) and, through
`fishcomp completion fish`, the tool's own fish completion script.
"""

from .schema import CLISchema, Command, Flag, FlagType, Positional


# =============================================================================
# SHARED FLAGS
# =============================================================================

def _output_flag(help_text: str) -> Flag:
    return Flag(
        name="output",
        short="o",
        help=help_text,
        type=FlagType.STRING,
        metavar="OUTPUT",
    )


# =============================================================================
# COMMAND DEFINITIONS
# =============================================================================

GENERATE_COMMAND = Command(
    name="generate",
    help="Generate a fish completion script from a YAML command tree.",
    description="Load a command tree from a YAML definition and write the fish completion script for it.",
    aliases=["gen"],
    positionals=[
        Positional(name="input", help="YAML file describing the command tree."),
    ],
    flags=[
        _output_flag("Write the script to OUTPUT instead of standard output."),
        Flag(
            name="check",
            help="Check that OUTPUT is up to date instead of writing it (exit 1 if not).",
            type=FlagType.BOOL,
            default=False,
        ),
    ],
)

VALIDATE_COMMAND = Command(
    name="validate",
    help="Check a YAML command tree and print it.",
    description="Load a command tree from a YAML definition, report any problem, and print the tree.",
    positionals=[
        Positional(name="input", help="YAML file describing the command tree."),
    ],
)

COMPLETION_FISH_COMMAND = Command(
    name="fish",
    help="Generate the fish completion script for fishcomp.",
    flags=[
        _output_flag("Write the script to OUTPUT instead of standard output."),
    ],
)

COMPLETION_COMMAND = Command(
    name="completion",
    help="Generate shell completion scripts for fishcomp itself.",
    subcommands=[COMPLETION_FISH_COMMAND],
)


# =============================================================================
# ROOT
# =============================================================================

FISHCOMP_ROOT_COMMAND = Command(
    name="fishcomp",
    help="Generate fish shell completion scripts from command trees.",
    persistent_flags=[
        Flag(
            name="no-color",
            help="Disable colored status output.",
            type=FlagType.BOOL,
            default=False,
        ),
    ],
    subcommands=[
        GENERATE_COMMAND,
        VALIDATE_COMMAND,
        COMPLETION_COMMAND,
    ],
)
FISHCOMP_ROOT_COMMAND.set_help_command()

FISHCOMP_CLI_SCHEMA = CLISchema(
    root=FISHCOMP_ROOT_COMMAND,
    description="""\
fishcomp turns a declarative command tree into a fish completion script. \
Describe your program's commands and flags in YAML, then run \
fishcomp generate <file> -o <program>.fish.""",
)
