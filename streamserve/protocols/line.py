from .. import gvars
from ..exceptions import FrameTooLarge


class LineFramer:
    def __init__(self, max_length: int = gvars.MAX_LINE_SIZE):
        self.max_length = max_length

    def cut_message(self, buf):
        "Pop one ``\\n`` terminated message (newline included) or return None."
        idx = buf.find(b"\n")
        if idx < 0:
            if len(buf) > self.max_length:
                raise FrameTooLarge(f"line longer than {self.max_length} bytes")
            return None
        return buf.take(idx + 1)
