"""
Shell completion for fishcomp itself.

Backs `fishcomp completion fish [-o OUTPUT]`. The script is generated from
the same command tree the argument parser is built from, so it cannot drift
from the actual CLI.
"""

from .state import ARG
from .generate import emit
from .cli.commands import FISHCOMP_ROOT_COMMAND
from .cli.fish_gen import generate_fish_completion


def completion():
    """Main entry point for completion command."""
    {
        "fish": lambda: emit(generate_fish_completion(FISHCOMP_ROOT_COMMAND), ARG("output"), False),
    }[ARG("completion")]()
