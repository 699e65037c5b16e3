import httptools
import iofree

from . import gvars
from .utils import open_connection, run_parser_curio, show


@iofree.parser
def line_reader():
    parser = yield from iofree.get_parser()
    while True:
        line = yield from iofree.read_until(b"\n", return_tail=False)
        parser.respond(result=line)


class HTTPResponse:
    def __init__(self):
        self.done = False
        self.status_code = None
        self.headers = []
        self.body = b""

    def on_header(self, name: bytes, value: bytes):
        self.headers.append((name, value))

    def on_body(self, body: bytes):
        self.body += body

    def on_message_complete(self):
        self.done = True

    def header(self, name: bytes):
        for key, value in self.headers:
            if key.lower() == name.lower():
                return value
        return None


class ClientBase:
    sock = None

    def __init__(self, bind_addr):
        self.bind_addr = bind_addr

    def __repr__(self):
        return f"{self.__class__.__name__}({show(self.bind_addr)})"

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, et, e, tb):
        await self.close()

    async def connect(self):
        if self.sock:
            return
        self.sock = await open_connection(*self.bind_addr)

    async def close(self):
        if self.sock:
            await self.sock.close()
            self.sock = None

    async def recv(self, size):
        return await self.sock.recv(size)

    async def sendall(self, data):
        return await self.sock.sendall(data)


class LineClient(ClientBase):
    def __init__(self, bind_addr):
        super().__init__(bind_addr)
        self.parser = line_reader.parser()

    async def send_line(self, line):
        if isinstance(line, str):
            line = line.encode()
        await self.sendall(line + b"\n")

    async def recv_line(self) -> bytes:
        return await run_parser_curio(self.parser, self.sock)


class HTTPClient(ClientBase):
    async def send_request(
        self, method: str = "GET", path: str = "/", headers: list = None, body=b""
    ):
        header_list = [f"Host: {show(self.bind_addr)}".encode()]
        for header in headers or []:
            if isinstance(header, str):
                header = header.encode()
            header_list.append(header)
        if body:
            header_list.append(b"Content-Length: %d" % len(body))
        data = b"%b %b HTTP/1.1\r\n%b\r\n\r\n" % (
            method.upper().encode(),
            path.encode(),
            b"\r\n".join(header_list),
        )
        await self.sendall(data + body)

    async def recv_response(self) -> HTTPResponse:
        response = HTTPResponse()
        parser = httptools.HttpResponseParser(response)
        while not response.done:
            data = await self.recv(gvars.PACKET_SIZE)
            if not data:
                raise Exception("Incomplete response")
            parser.feed_data(data)
        response.status_code = parser.get_status_code()
        return response

    async def http_request(self, method="GET", path="/", headers=None, body=b""):
        await self.send_request(method, path, headers, body)
        return await self.recv_response()
