import typing


gARG: dict = {}

def ARG(arg: str, dflt = None) -> typing.Any:
    # pylint: disable=global-variable-not-assigned
    global gARG
    if arg in gARG:
        return gARG[arg]
    if dflt is not None:
        return dflt

    raise KeyError(f"{arg} is not an argument.")
