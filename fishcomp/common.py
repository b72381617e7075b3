import os, yaml

from os.path import join, abspath, normpath, dirname, realpath


FISHCOMP_ROOT_DIR     = abspath(normpath(f"{dirname(realpath(__file__))}/.."))
FISHCOMP_EXAMPLES_DIR = abspath(join(FISHCOMP_ROOT_DIR, "examples"))


class FishcompException(Exception):
    pass


def file_write(filepath: str, content: str, if_different: bool = False):
    try:
        if if_different and os.path.isfile(filepath):
            with open(filepath, "r") as f:
                if f.read() == content:
                    return

        with open(filepath, "w") as f:
            f.write(content)
    except IOError as exc:
        raise FishcompException(f'Failed to write to "{filepath}": {exc}') from exc


def file_read(filepath: str):
    try:
        with open(filepath, "r") as f:
            return f.read()
    except IOError as exc:
        raise FishcompException(f'Failed to read from "{filepath}": {exc}') from exc


def file_load_yaml(filepath: str):
    try:
        with open(filepath, "r") as f:
            return yaml.safe_load(f)
    except (IOError, yaml.YAMLError) as exc:
        raise FishcompException(f'Failed to load YAML from "{filepath}": {exc}') from exc

