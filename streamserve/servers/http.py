from .. import __version__, gvars
from ..body import MemoryBodyReader, drain, reader_from_request
from ..exceptions import HTTPError, UnexpectedEOF, UnsupportedBodyFraming
from ..protocols.http import HttpRequestFramer, encode_response_head
from .base import ServerBase

SERVER_HEADER = f"Server: streamserve/{__version__}".encode()


class Response:
    def __init__(self, code: int, headers: list, body):
        if body.length < 0:
            raise UnsupportedBodyFraming("response body of unknown length")
        self.code = code
        self.headers = headers
        self.body = body

    def head(self) -> bytes:
        headers = self.headers + [b"Content-Length: %d" % self.body.length]
        return encode_response_head(self.code, headers)


async def handle_request(request, body) -> Response:
    if request.target == b"/echo":
        resp_body = body
    else:
        resp_body = MemoryBodyReader(b"hello world.\n")
    return Response(200, [SERVER_HEADER], resp_body)


async def write_response(conn, response: Response):
    await conn.write(response.head())
    while True:
        data = await response.body.read()
        if not data:
            break
        await conn.write(data)


def error_response(exc: HTTPError) -> Response:
    body = MemoryBodyReader(f"{exc.args[0]}\n".encode())
    headers = [
        SERVER_HEADER,
        b"Connection: close",
        b"Content-Type: text/plain",
    ]
    return Response(exc.code.value, headers, body)


class HTTPServer(ServerBase):
    proto = "HTTP"

    def __init__(self, bind_addr, max_header=gvars.MAX_HEADER_SIZE):
        self.bind_addr = bind_addr
        self.framer = HttpRequestFramer(int(max_header))
        self.response_started = False

    async def _run(self):
        while await self.handle_one():
            pass

    async def read_request(self):
        while True:
            request = self.framer.cut_message(self.buf)
            if request is not None:
                return request
            data = await self.conn.read()
            if not data:
                if len(self.buf) == 0:
                    return None
                raise UnexpectedEOF("connection closed inside a request head")
            self.buf.push(data)

    async def handle_one(self) -> bool:
        "Serve one request; return whether the connection stays open."
        self.response_started = False
        request = await self.read_request()
        if request is None:
            return False
        gvars.logger.debug(f"{self} {request!r}")
        body = reader_from_request(self.conn, self.buf, request)
        response = await handle_request(request, body)
        self.response_started = True
        await write_response(self.conn, response)
        if request.version == "1.0":
            return False
        await drain(body)
        return True

    async def on_protocol_error(self, exc):
        if self.response_started or not isinstance(exc, HTTPError):
            return
        await write_response(self.conn, error_response(exc))
