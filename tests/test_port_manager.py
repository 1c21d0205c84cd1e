import os
import socket
import sys

import pytest

from portsink.port_manager import describe_port_owners, find_processes_using_port, is_port_free


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def test_is_port_free(occupied_port):
    assert not is_port_free(occupied_port)
    assert is_port_free(_free_port())


@pytest.mark.skipif(not sys.platform.startswith("linux"),
                    reason="other platforms need root to map sockets to pids")
def test_owner_of_listening_port_is_this_process(occupied_port):
    pids = [p.pid for p in find_processes_using_port(occupied_port)]
    assert pids == [os.getpid()]
    owners = describe_port_owners(occupied_port)
    assert owners[0]["pid"] == os.getpid()
    assert owners[0]["name"]


def test_nobody_owns_a_free_port():
    assert describe_port_owners(_free_port()) == []
