"""
Generate fish completion scripts from YAML command trees.

Backs `fishcomp generate INPUT [-o OUTPUT] [--check]`.
"""

import sys
from pathlib import Path

from .printer import cons
from .common import FishcompException, file_read, file_write
from .state import ARG
from .cli.loader import load_command_tree_file
from .cli.fish_gen import generate_fish_completion, write_fish_completion


def check_or_write(path: Path, content: str, check_mode: bool) -> bool:
    """Check if file is up to date or write new content. Returns True on success."""
    if check_mode:
        if not path.exists():
            cons.print(f"[red]ERROR:[/red] {path} does not exist")
            return False
        if file_read(str(path)) != content:
            cons.print(f"[red]ERROR:[/red] {path} is out of date")
            cons.print("[yellow]Run fishcomp generate to update[/yellow]")
            return False
        cons.print(f"[green]OK[/green] {path.name} is up to date")
    else:
        if path.parent != Path(""):
            path.parent.mkdir(parents=True, exist_ok=True)
        file_write(str(path), content)
        cons.print(f"[green]Generated[/green] {path}")
    return True


def emit(content: str, output, check_mode: bool):
    """Send a generated script to OUTPUT, or to standard output when unset."""
    if output is None:
        if check_mode:
            raise FishcompException("--check needs an --output file to compare against.")
        sys.stdout.write(content)
        return

    if not check_or_write(Path(output), content, check_mode):
        sys.exit(1)


def generate():
    """Regenerate (or check) the fish completion script for a YAML command tree."""
    root = load_command_tree_file(ARG("input"))

    if ARG("output") is None and not ARG("check"):
        write_fish_completion(root, sys.stdout)
        return

    emit(generate_fish_completion(root), ARG("output"), ARG("check"))
