# utils.py
"""
Common utilities: color init and printing helpers.
Everything here writes to stderr; stdout belongs to the received bytes.
"""

import sys

from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()


def _emit(msg: str, color: str = ""):
    if color:
        msg = color + msg + Style.RESET_ALL
    print(msg, file=sys.stderr, flush=True)

def print_info(msg: str):
    _emit(msg)

def print_header(title: str):
    _emit("====== " + title + " ======", Fore.CYAN)

def print_success(msg: str):
    _emit(msg, Fore.GREEN)

def print_warning(msg: str):
    _emit(msg, Fore.YELLOW)

def print_error(msg: str):
    _emit(msg, Fore.RED)

def quote_argv(argv):
    """Render an argument vector as `"a" "b" "c"` for the command-line echo."""
    return " ".join(f'"{a}"' for a in argv)
