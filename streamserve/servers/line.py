from .. import gvars
from ..protocols.line import LineFramer
from .base import ServerBase

QUIT = b"quit\n"


class LineEchoServer(ServerBase):
    proto = "LINE"

    def __init__(self, bind_addr, max_line=gvars.MAX_LINE_SIZE):
        self.bind_addr = bind_addr
        self.framer = LineFramer(int(max_line))

    async def _run(self):
        while True:
            msg = self.framer.cut_message(self.buf)
            if msg is None:
                data = await self.conn.read()
                if not data:
                    if len(self.buf):
                        gvars.logger.debug(
                            f"{self} drop {len(self.buf)} unterminated bytes"
                        )
                    return
                self.buf.push(data)
                continue
            if msg == QUIT:
                await self.conn.write(b"Bye.\n")
                return
            await self.conn.write(b"Echo: " + msg)
