import io
import socket
import threading

import pytest

from portsink import run


class ListenerThread:
    """Runs portsink.run() in the background with an in-memory sink."""

    def __init__(self, port=0, buffer_size=4096, to_stdout=False):
        self.sink = None if to_stdout else io.BytesIO()
        self.port = None
        self.error = None
        self._ready = threading.Event()
        self._requested_port = port
        self._buffer_size = buffer_size
        self._thread = threading.Thread(target=self._target, daemon=True)

    def _on_listening(self, addr):
        self.port = addr[1]
        self._ready.set()

    def _target(self):
        try:
            run(self._requested_port, sink=self.sink,
                on_listening=self._on_listening, buffer_size=self._buffer_size)
        except Exception as e:
            self.error = e
        finally:
            self._ready.set()

    def start(self):
        self._thread.start()
        assert self._ready.wait(5), "listener never became ready"
        if self.error:
            raise self.error
        return self

    def connect(self):
        return socket.create_connection(("127.0.0.1", self.port), timeout=5)

    def join(self, timeout=5):
        self._thread.join(timeout)
        assert not self._thread.is_alive(), "run() did not return"
        return self.sink.getvalue() if self.sink is not None else None


@pytest.fixture
def listener():
    started = []

    def _start(port=0, buffer_size=4096, to_stdout=False):
        lt = ListenerThread(port, buffer_size, to_stdout).start()
        started.append(lt)
        return lt

    yield _start
    # make sure no test leaves a run() blocked in accept
    for lt in started:
        if lt._thread.is_alive() and lt.port:
            try:
                lt.connect().close()
            except OSError:
                pass
            lt._thread.join(5)


@pytest.fixture
def occupied_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("0.0.0.0", 0))
        s.listen(1)
        yield s.getsockname()[1]
