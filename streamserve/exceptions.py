import http


class Error(Exception):
    pass


class TransportError(Error):
    pass


class ReadInProgress(Error):
    pass


class ProtocolError(Error):
    pass


class FrameTooLarge(ProtocolError):
    pass


class HTTPError(ProtocolError):
    code = http.HTTPStatus.BAD_REQUEST

    def __init__(self, message=None, code=None):
        if code is not None:
            self.code = http.HTTPStatus(code)
        super().__init__(message or self.code.phrase)

    def __str__(self):
        return f"HTTP {self.code.value} {self.code.phrase}, {self.args[0]}"


class HeaderTooLarge(HTTPError):
    code = http.HTTPStatus(413)


class MalformedRequest(HTTPError):
    code = http.HTTPStatus.BAD_REQUEST


class MalformedHeader(HTTPError):
    code = http.HTTPStatus.BAD_REQUEST


class UnexpectedEOF(HTTPError):
    code = http.HTTPStatus.BAD_REQUEST


class UnsupportedBodyFraming(HTTPError):
    code = http.HTTPStatus.NOT_IMPLEMENTED
