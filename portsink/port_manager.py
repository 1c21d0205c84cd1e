# port_manager.py
"""
Port diagnostics:
- find processes holding a port (psutil)
- describe them for an error report
- quick connect check for whether something accepts on a port
"""

import socket
import psutil
from typing import List, Dict


def find_processes_using_port(port: int, listening_only: bool = True) -> List[psutil.Process]:
    """Return psutil.Process objects bound to the given local port, deduped by pid."""
    procs = []
    try:
        conns = psutil.net_connections(kind='inet')
    except psutil.AccessDenied:
        # macOS and friends need root for this; report nothing rather than fail the report
        return []
    for conn in conns:
        if not conn.laddr or conn.laddr.port != port or not conn.pid:
            continue
        if listening_only and conn.status != psutil.CONN_LISTEN:
            continue
        try:
            procs.append(psutil.Process(conn.pid))
        except psutil.NoSuchProcess:
            continue
    unique = {}
    for p in procs:
        unique[p.pid] = p
    return list(unique.values())

def describe_port_owners(port: int) -> List[Dict]:
    """Return [{pid, name, cmdline}] for processes listening on port."""
    owners = []
    for p in find_processes_using_port(port):
        try:
            owners.append({"pid": p.pid, "name": p.name(), "cmdline": p.cmdline()})
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            owners.append({"pid": p.pid, "name": "<unknown>", "cmdline": []})
    return owners

def is_port_free(port: int, host: str = "127.0.0.1", timeout: float = 0.2) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.settimeout(timeout)
        return s.connect_ex((host, port)) != 0
