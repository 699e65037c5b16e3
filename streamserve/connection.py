import enum

import curio

from . import gvars
from .exceptions import ReadInProgress, TransportError


class State(enum.Enum):
    OPEN = enum.auto()
    ERRORED = enum.auto()
    ENDED = enum.auto()


class Continuation:
    "One-shot resolve/reject slot for a single waiting reader."

    def __init__(self):
        self._event = curio.Event()
        self._value = None
        self._exc = None

    @property
    def settled(self) -> bool:
        return self._event.is_set()

    async def resolve(self, value):
        assert not self.settled, "continuation settled twice"
        self._value = value
        await self._event.set()

    async def reject(self, exc: BaseException):
        assert not self.settled, "continuation settled twice"
        self._exc = exc
        await self._event.set()

    async def wait(self):
        await self._event.wait()
        if self._exc is not None:
            raise self._exc
        return self._value


class AsyncConnection:
    """Pull based reads over an event pushing transport.

    Only one ``read()`` may be pending. The transport is paused as soon
    as a chunk arrives and resumed by the next ``read()``, so at most one
    chunk is in flight. Errors and end of stream are sticky.
    """

    def __init__(self, transport):
        self.transport = transport
        self.error = None
        self.ended = False
        self.reader = None
        self._held = b""

    def __repr__(self):
        return f"{self.__class__.__name__}({self.state.name})"

    @property
    def state(self) -> State:
        if self.error is not None:
            return State.ERRORED
        if self.ended:
            return State.ENDED
        return State.OPEN

    def _take_reader(self):
        reader, self.reader = self.reader, None
        return reader

    async def data_received(self, data: bytes):
        self.transport.pause_reading()
        reader = self._take_reader()
        if reader is None:
            # the reader was cancelled after the transport was resumed
            self._held += data
            return
        await reader.resolve(data)

    async def error_received(self, exc: BaseException):
        if self.error is not None:
            return
        if isinstance(exc, TransportError):
            self.error = exc
        else:
            self.error = TransportError(str(exc) or exc.__class__.__name__)
            self.error.__cause__ = exc
        gvars.logger.debug(f"{self} {exc!r}")
        reader = self._take_reader()
        if reader is not None:
            await reader.reject(self.error)

    async def eof_received(self):
        if self.ended:
            return
        self.ended = True
        reader = self._take_reader()
        if reader is not None:
            await reader.resolve(b"")

    async def read(self) -> bytes:
        if self.reader is not None:
            raise ReadInProgress("another read is pending on this connection")
        if self.error is not None:
            raise self.error
        if self._held:
            data, self._held = self._held, b""
            return data
        if self.ended:
            return b""
        reader = self.reader = Continuation()
        await self.transport.resume_reading()
        try:
            return await reader.wait()
        finally:
            if self.reader is reader:
                self.reader = None
                self.transport.pause_reading()

    async def write(self, data: bytes):
        if self.error is not None:
            raise self.error
        try:
            await self.transport.write(data)
        except OSError as e:
            await self.error_received(e)
            raise self.error from e
