import socket

import curio

import iofree

from . import gvars


async def run_parser_curio(parser, sock):
    parser.send(b"")
    while True:
        for to_send, close, exc, result in parser:
            if to_send:
                await sock.sendall(to_send)
            if close:
                await sock.close()
            if exc:
                raise exc
            if result is not iofree._no_result:
                return result
        data = await sock.recv(gvars.PACKET_SIZE)
        if not data:
            raise iofree.ParseError("need data")
        parser.send(data)


async def open_connection(host, port, **kwargs):
    for i in range(2, -1, -1):
        try:
            return await curio.open_connection(host, port, **kwargs)
        except socket.gaierror:
            if i == 0:
                gvars.logger.debug(f"dns query failed: {host}")
                raise


def show(addr):
    return f"{addr[0]}:{addr[1]}"
