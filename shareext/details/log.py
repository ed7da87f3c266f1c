import sys

PREFIX = "[ShareExt]"


def log(message: str) -> None:
    print(f"{PREFIX} {message}")


def log_error(message: str) -> None:
    print(f"{PREFIX} ERROR: {message}", file=sys.stderr)
