import curio
from curio import socket

from streamserve.connection import AsyncConnection, State
from streamserve.transport import SocketTransport


class Recorder:
    def __init__(self, transport):
        self.transport = transport
        self.chunks = []
        self.errors = []
        self.ended = curio.Event()

    async def data_received(self, data):
        self.transport.pause_reading()
        self.chunks.append(data)

    async def error_received(self, exc):
        self.errors.append(exc)

    async def eof_received(self):
        await self.ended.set()


def test_transport_starts_paused():
    async def main():
        a, b = socket.socketpair()
        transport = SocketTransport(a)
        recorder = Recorder(transport)
        await transport.start(recorder)
        await b.sendall(b"hello")
        await curio.sleep(0.05)
        assert not transport.is_reading
        assert recorder.chunks == []
        await transport.resume_reading()
        while not recorder.chunks:
            await curio.sleep(0.01)
        assert recorder.chunks == [b"hello"]
        assert not transport.is_reading
        await b.close()
        await transport.resume_reading()
        await recorder.ended.wait()
        await transport.close()
        await transport.close()
        assert transport.closed

    curio.run(main)


def test_connection_over_socket():
    async def main():
        a, b = socket.socketpair()
        transport = SocketTransport(a, chunk_size=4)
        conn = AsyncConnection(transport)
        await transport.start(conn)
        await b.sendall(b"abcdef")
        assert await conn.read() == b"abcd"
        assert await conn.read() == b"ef"
        await conn.write(b"reply")
        assert await b.recv(100) == b"reply"
        await b.close()
        assert await conn.read() == b""
        assert conn.state is State.ENDED
        assert await conn.read() == b""
        await transport.close()

    curio.run(main)
