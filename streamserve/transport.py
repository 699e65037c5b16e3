import curio

from . import gvars


class SocketTransport:
    """Event pushing transport over a curio socket.

    A pump task reads from the socket and hands every chunk, error and
    end of stream to the protocol's ``data_received``, ``error_received``
    and ``eof_received``. Reading starts paused; the protocol decides
    when the next ``recv`` may happen through ``resume_reading``.
    """

    def __init__(self, sock, chunk_size: int = gvars.PACKET_SIZE):
        self.sock = sock
        self.chunk_size = chunk_size
        self.protocol = None
        self.closed = False
        self._reading = curio.Event()
        self._pump_task = None

    @property
    def is_reading(self) -> bool:
        return self._reading.is_set()

    async def start(self, protocol):
        self.protocol = protocol
        self._pump_task = await curio.spawn(self._pump, daemon=True)

    def pause_reading(self):
        self._reading.clear()

    async def resume_reading(self):
        await self._reading.set()

    async def _pump(self):
        while True:
            await self._reading.wait()
            try:
                data = await self.sock.recv(self.chunk_size)
            except OSError as e:
                await self.protocol.error_received(e)
                return
            if not data:
                await self.protocol.eof_received()
                return
            await self.protocol.data_received(data)

    async def write(self, data: bytes):
        await self.sock.sendall(data)

    async def close(self):
        if self.closed:
            return
        self.closed = True
        if self._pump_task is not None:
            await self._pump_task.cancel()
        await self.sock.close()
