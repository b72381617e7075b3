#!/usr/bin/env python3

import sys, typing

from rich.markup         import escape

from fishcomp            import args, state
from fishcomp.state      import ARG
from fishcomp.common     import FishcompException
from fishcomp.printer    import cons
from fishcomp.generate   import generate
from fishcomp.validate   import validate
from fishcomp.completion import completion


def __run():
    {"generate":   generate,  "validate": validate,
     "completion": completion, "help":    args.help,
    }[ARG("command")]()


def main(argv: typing.List[str] = None) -> int:
    try:
        state.gARG = args.parse(argv)

        cons.set_color(not ARG("no_color", False))

        __run()
    except FishcompException as exc:
        cons.print(f"""\
[bold red]Error[/bold red]: {escape(str(exc))}
""")
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception as exc:  # pylint: disable=broad-except
        cons.print_exception()
        cons.print(f"""\

[bold red]ERROR[/bold red]: An unexpected exception occurred: {escape(str(exc))}
""")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
