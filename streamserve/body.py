import abc

from .exceptions import MalformedRequest, UnexpectedEOF, UnsupportedBodyFraming

BODYLESS_METHODS = ("GET", "HEAD")


class BodyReader(abc.ABC):
    # the declared length, -1 if unknown
    length = -1

    @abc.abstractmethod
    async def read(self) -> bytes:
        "next chunk of the body, b'' once it is exhausted"


class LengthBodyReader(BodyReader):
    def __init__(self, conn, buf, length: int):
        if length < 0:
            raise ValueError(f"body length must not be negative: {length}")
        self.conn = conn
        self.buf = buf
        self.length = length
        self.remain = length

    async def read(self) -> bytes:
        if self.remain <= 0:
            return b""
        if len(self.buf) == 0:
            data = await self.conn.read()
            if not data:
                raise UnexpectedEOF(
                    f"connection closed with {self.remain} body bytes missing"
                )
            self.buf.push(data)
        data = self.buf.take(min(len(self.buf), self.remain))
        self.remain -= len(data)
        return data


class MemoryBodyReader(BodyReader):
    def __init__(self, data: bytes):
        self.data = data
        self.length = len(data)
        self.done = False

    async def read(self) -> bytes:
        if self.done:
            return b""
        self.done = True
        return self.data


def reader_from_request(conn, buf, request) -> BodyReader:
    length = -1
    content_length = request.field_get("Content-Length")
    if content_length is not None:
        if not content_length.isdigit():
            raise MalformedRequest(f"bad Content-Length: {content_length!r}")
        length = int(content_length)
    chunked = request.field_get("Transfer-Encoding") == b"chunked"
    if request.method in BODYLESS_METHODS:
        if length > 0 or chunked:
            raise MalformedRequest(f"{request.method} request must not have a body")
        length = 0
    if chunked:
        raise UnsupportedBodyFraming("chunked transfer encoding")
    if length < 0:
        raise UnsupportedBodyFraming("request body without Content-Length")
    return LengthBodyReader(conn, buf, length)


async def drain(body: BodyReader) -> int:
    size = 0
    while True:
        data = await body.read()
        if not data:
            return size
        size += len(data)
