import http
import re

from .. import gvars
from ..exceptions import HeaderTooLarge, MalformedHeader, MalformedRequest

HEAD_END = b"\r\n\r\n"
HTTP_VERSION = re.compile(b"HTTP/([0-9]\\.[0-9])")


def split_header(line: bytes):
    key, sep, value = line.partition(b": ")
    if not sep or not key or not value:
        return None
    return key, value


class ParsedRequest:
    def __init__(self, method: str, target: bytes, version: str, headers: list):
        self.method = method
        self.target = target
        self.version = version
        self.headers = headers

    def __repr__(self):
        return (
            f"{self.__class__.__name__}({self.method} {self.target.decode('latin1')}"
            f" HTTP/{self.version})"
        )

    def field_get(self, name):
        if isinstance(name, str):
            name = name.encode("latin1")
        for line in self.headers:
            pair = split_header(line)
            if pair and pair[0] == name:
                return pair[1]
        return None

    @classmethod
    def parse(cls, head: bytes):
        first_line, *header_lines = head.split(b"\r\n")
        tokens = first_line.split(b" ")
        if len(tokens) != 3 or not all(tokens):
            raise MalformedRequest(f"bad request line: {first_line!r}")
        method, target, ver = tokens
        match = HTTP_VERSION.fullmatch(ver)
        if match is None:
            raise MalformedRequest(f"bad protocol version: {ver!r}")
        for line in header_lines:
            if split_header(line) is None:
                raise MalformedHeader(f"bad header line: {line!r}")
        return cls(
            method.decode("latin1"), target, match.group(1).decode(), header_lines
        )


class HttpRequestFramer:
    def __init__(self, max_header: int = gvars.MAX_HEADER_SIZE):
        self.max_header = max_header

    def cut_message(self, buf):
        "Pop one complete request head from ``buf``, or return None."
        idx = buf.find(HEAD_END)
        size = len(buf) if idx < 0 else idx + len(HEAD_END)
        if size > self.max_header:
            raise HeaderTooLarge(f"header larger than {self.max_header} bytes")
        if idx < 0:
            return None
        request = ParsedRequest.parse(bytes(buf.view()[:idx]))
        buf.pop_front(idx + len(HEAD_END))
        return request


def encode_response_head(code: int, headers) -> bytes:
    status = http.HTTPStatus(code)
    lines = [b"HTTP/1.1 %d %s" % (status.value, status.phrase.encode())]
    lines.extend(headers)
    return b"\r\n".join(lines) + HEAD_END
