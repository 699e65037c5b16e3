import curio
import pytest

from streamserve.body import (
    LengthBodyReader,
    MemoryBodyReader,
    drain,
    reader_from_request,
)
from streamserve.buffer import ByteAccumulator
from streamserve.exceptions import (
    MalformedRequest,
    UnexpectedEOF,
    UnsupportedBodyFraming,
)
from streamserve.protocols.http import ParsedRequest


def make_request(method="POST", *headers):
    return ParsedRequest(method, b"/echo", "1.1", list(headers))


def test_length_reader_pulls_from_connection(scripted):
    async def main():
        conn = scripted(b"ab", b"cde")
        body = LengthBodyReader(conn, ByteAccumulator(), 5)
        assert body.length == 5
        assert await body.read() == b"ab"
        assert await body.read() == b"cde"
        assert await body.read() == b""
        assert await body.read() == b""
        assert conn.reads == 2

    curio.run(main)


def test_length_reader_uses_leftover_bytes_first(scripted):
    async def main():
        conn = scripted(b"defGET / HTTP/1.1\r\n")
        buf = ByteAccumulator()
        buf.push(b"abc")
        body = LengthBodyReader(conn, buf, 6)
        assert await body.read() == b"abc"
        assert conn.reads == 0
        assert await body.read() == b"def"
        assert await body.read() == b""
        assert bytes(buf) == b"GET / HTTP/1.1\r\n"

    curio.run(main)


def test_length_reader_unexpected_eof(scripted):
    async def main():
        body = LengthBodyReader(scripted(b"ab"), ByteAccumulator(), 5)
        assert await body.read() == b"ab"
        with pytest.raises(UnexpectedEOF) as exc_info:
            await body.read()
        assert exc_info.value.code == 400

    curio.run(main)


def test_length_reader_refuses_unknown_length(scripted):
    with pytest.raises(ValueError):
        LengthBodyReader(scripted(), ByteAccumulator(), -1)


def test_empty_length_reader_does_not_read(scripted):
    async def main():
        conn = scripted(b"next request")
        body = LengthBodyReader(conn, ByteAccumulator(), 0)
        assert await body.read() == b""
        assert conn.reads == 0

    curio.run(main)


def test_memory_reader():
    async def main():
        body = MemoryBodyReader(b"hello world.\n")
        assert body.length == 13
        assert await body.read() == b"hello world.\n"
        assert await body.read() == b""
        assert await body.read() == b""

    curio.run(main)


def test_drain(scripted):
    async def main():
        body = LengthBodyReader(scripted(b"12", b"345", b"6789"), ByteAccumulator(), 9)
        assert await drain(body) == 9
        assert await drain(body) == 0

    curio.run(main)


def test_reader_from_request(scripted):
    body = reader_from_request(
        scripted(), ByteAccumulator(), make_request("POST", b"Content-Length: 42")
    )
    assert isinstance(body, LengthBodyReader)
    assert body.length == 42


@pytest.mark.parametrize("method", ["GET", "HEAD"])
def test_bodyless_methods(scripted, method):
    body = reader_from_request(scripted(), ByteAccumulator(), make_request(method))
    assert body.length == 0
    body = reader_from_request(
        scripted(), ByteAccumulator(), make_request(method, b"Content-Length: 0")
    )
    assert body.length == 0


@pytest.mark.parametrize(
    "header", [b"Content-Length: 5", b"Transfer-Encoding: chunked"]
)
def test_get_must_not_have_a_body(scripted, header):
    with pytest.raises(MalformedRequest) as exc_info:
        reader_from_request(scripted(), ByteAccumulator(), make_request("GET", header))
    assert exc_info.value.code == 400


@pytest.mark.parametrize(
    "value", [b"abc", b"-1", b"1.5", b" 5", b"+5", b"1_0", b"\xd9\xa5"]
)
def test_bad_content_length(scripted, value):
    with pytest.raises(MalformedRequest):
        reader_from_request(
            scripted(),
            ByteAccumulator(),
            make_request("POST", b"Content-Length: " + value),
        )


def test_chunked_is_not_implemented(scripted):
    with pytest.raises(UnsupportedBodyFraming) as exc_info:
        reader_from_request(
            scripted(),
            ByteAccumulator(),
            make_request("POST", b"Transfer-Encoding: chunked"),
        )
    assert exc_info.value.code == 501


def test_missing_length_is_not_implemented(scripted):
    with pytest.raises(UnsupportedBodyFraming) as exc_info:
        reader_from_request(scripted(), ByteAccumulator(), make_request("PUT"))
    assert exc_info.value.code == 501
