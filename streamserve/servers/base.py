import abc

import curio

from .. import gvars
from ..buffer import ByteAccumulator
from ..connection import AsyncConnection
from ..exceptions import ProtocolError, TransportError
from ..transport import SocketTransport
from ..utils import show


class ServerBase(abc.ABC):
    client_addr = ("unknown", -1)
    conn = None
    buf = None

    @property
    @abc.abstractmethod
    def proto(self):
        ""

    @abc.abstractmethod
    async def _run(self):
        ""

    async def on_protocol_error(self, exc: ProtocolError):
        ""

    @property
    def client_address(self) -> str:
        return show(self.client_addr)

    @property
    def bind_address(self) -> str:
        return show(self.bind_addr)

    def __repr__(self):
        return f"{self.__class__.__name__}({self})"

    def __str__(self):
        return f"{self.client_address} -- {self.proto} -- {self.bind_address}"

    def setup(self, conn, buf=None):
        self.conn = conn
        self.buf = ByteAccumulator() if buf is None else buf

    async def __call__(self, client, addr):
        self.client_addr = addr
        transport = SocketTransport(client)
        self.setup(AsyncConnection(transport))
        gvars.logger.info(f"{self} connected")
        try:
            async with client:
                await transport.start(self.conn)
                try:
                    await self._run()
                except ProtocolError as e:
                    gvars.logger.info(f"{self} {e}")
                    await self.on_protocol_error(e)
                finally:
                    await transport.close()
        except curio.errors.TaskCancelled:
            pass
        except TransportError as e:
            gvars.logger.debug(f"{self} transport error: {e}")
        except Exception as e:
            gvars.logger.exception(f"{self} {e}")
        else:
            gvars.logger.info(f"{self} closed")
