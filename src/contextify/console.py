"""
Console diagnostics. Progress goes to stdout, problems to stderr.
"""

import sys

from colorama import Fore, Style

PREFIX = "[contextify]"


def _emit(msg: str, color: str = "", stream=None) -> None:
    line = f"{PREFIX} {msg}"
    if color:
        line = color + line + Style.RESET_ALL
    print(line, file=stream or sys.stdout)


def info(msg: str) -> None:
    _emit(msg)


def success(msg: str) -> None:
    _emit(msg, Fore.GREEN)


def warn(msg: str) -> None:
    _emit(msg, Fore.YELLOW, sys.stderr)


def error(msg: str) -> None:
    print(Fore.RED + f"Error: {msg}" + Style.RESET_ALL, file=sys.stderr)
