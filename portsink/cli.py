# cli.py
"""
Command-line entry point: parse the port, announce, serve one client, report.
"""

import argparse
import os
import sys

from .config import PROJECT_NAME, VERSION, DEFAULT_PORT, PORT_ENV_VAR
from .listener import run, ListenerError
from .port_manager import describe_port_owners, is_port_free
from .utils import print_header, print_info, print_success, print_warning, print_error, quote_argv


def port_number(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range (0-65535): {port}")
    return port

def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portsink",
        description="Accept one TCP client and print everything it sends to stdout.",
    )
    # a string default goes through port_number too
    default_port = os.environ.get(PORT_ENV_VAR, str(DEFAULT_PORT))
    parser.add_argument(
        "--port",
        type=port_number,
        default=default_port,
        help=f"TCP port to listen on, 0 for an ephemeral port (default: ${PORT_ENV_VAR} or {DEFAULT_PORT})",
    )
    parser.add_argument("--version", action="version", version=f"{PROJECT_NAME} {VERSION}")
    return parser

def _report_setup_failure(err: ListenerError):
    print_error(f"Failed to start: {err}")
    if err.stage != "bind":
        return
    owners = describe_port_owners(err.port)
    if not owners:
        if not is_port_free(err.port):
            print_warning(f"Port {err.port} accepts connections but its owner is not visible (try as root).")
        return
    print_header(f"Processes listening on port {err.port}")
    for o in owners:
        print_info(f" PID:{o['pid']:6} Name:{o['name'][:30]:30} Cmd:{' '.join(o['cmdline']) or '-'}")

def _silence_stdout():
    # buffered bytes would raise again when the interpreter flushes stdout at exit
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        pass

def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    print_info("[cmd] " + quote_argv([sys.argv[0]] + list(argv)))
    args = create_parser().parse_args(argv)

    print_info(f"Starting {PROJECT_NAME} (version {VERSION}) on port {args.port}")

    def announce(addr):
        print_success(f"Listening on {addr[0]}:{addr[1]}")

    try:
        run(args.port, on_listening=announce)
    except ListenerError as e:
        _report_setup_failure(e)
        return 1
    except KeyboardInterrupt:
        print_warning("\nInterrupted, shutting down.")
        return 130
    except BrokenPipeError:
        _silence_stdout()
        print_warning("Output closed by reader, shutting down.")
        return 1
    print_info("Server exited.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
