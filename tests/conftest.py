import pytest

from streamserve import gvars

gvars.logger.setLevel(10)


class FakeTransport:
    def __init__(self):
        self.reading = False
        self.resumes = 0
        self.written = []
        self.write_error = None
        self.closed = False

    def pause_reading(self):
        self.reading = False

    async def resume_reading(self):
        self.reading = True
        self.resumes += 1

    async def write(self, data):
        if self.write_error is not None:
            raise self.write_error
        self.written.append(bytes(data))

    async def close(self):
        self.closed = True


class ScriptedConnection:
    "Hands out the given chunks, then end of stream."

    def __init__(self, *chunks):
        self.chunks = list(chunks)
        self.reads = 0
        self.written = []

    async def read(self):
        self.reads += 1
        if self.chunks:
            return self.chunks.pop(0)
        return b""

    async def write(self, data):
        self.written.append(bytes(data))

    @property
    def output(self):
        return b"".join(self.written)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def scripted():
    return ScriptedConnection
