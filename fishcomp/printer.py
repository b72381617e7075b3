import typing

import rich, rich.console


class FishcompPrinter:
    def __init__(self):
        self.raw = rich.console.Console()

    def print(self, *args, msg: typing.Any = None, **kwargs):
        if msg is None:
            msg, args = (args[0], args[1:]) if args else ("", args)

        self.raw.print(str(msg), soft_wrap=True, *args, **kwargs)

    def set_color(self, enabled: bool):
        self.raw = rich.console.Console(no_color=not enabled, highlight=enabled)

    def print_exception(self):
        self.raw.print_exception()


cons = FishcompPrinter()
