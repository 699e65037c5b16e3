import argparse
import ipaddress
import logging
import os
import signal
import weakref
from urllib import parse

import curio
from curio import socket
from curio.network import run_server

from . import __doc__ as desc
from . import __version__, gvars
from .servers import server_protos

connections = weakref.WeakSet()
server_options = {"http": {"max_header"}, "line": {"max_line"}}


def TcpProtoFactory(cls, **kwargs):
    async def client_handler(client, addr):
        handler = cls(**kwargs)
        connections.add(handler)
        return await handler(client, addr)

    return client_handler


def parse_addr(s):
    if s.endswith("]") or ":" not in s:
        host, port = s, ""
    else:
        host, _, port = s.rpartition(":")
    port = -1 if not port else int(port)
    if not host:
        host = "0.0.0.0"
    elif len(host) >= 4 and host[0] == "[" and host[-1] == "]":
        host = host[1:-1]
    try:
        return (ipaddress.ip_address(host), port)
    except ValueError:
        return (host, port)


def parse_options(scheme, qs):
    kwargs = {}
    for key, values in qs.items():
        if key not in server_options[scheme]:
            raise argparse.ArgumentTypeError(f"unknown option: {key}")
        try:
            value = int(values[0])
        except ValueError:
            raise argparse.ArgumentTypeError(f"{key} must be an integer")
        if value <= 0:
            raise argparse.ArgumentTypeError(f"{key} must be positive")
        kwargs[key] = value
    return kwargs


def get_server(uri):
    url = parse.urlparse(uri)
    if url.scheme not in server_protos:
        raise argparse.ArgumentTypeError(f"unknown scheme: {uri}")
    proto = server_protos[url.scheme]
    try:
        host, port = parse_addr(url.netloc)
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad address: {uri}")
    if port == -1:
        port = gvars.default_ports.get(url.scheme, gvars.default_port)
    bind_addr = (str(host), port)
    kwargs = parse_options(url.scheme, parse.parse_qs(url.query))
    family = socket.AF_INET6 if ":" in bind_addr[0] else socket.AF_INET
    server_sock = curio.tcp_server_socket(*bind_addr, backlog=1024, family=family)
    real_ip, real_port, *_ = server_sock._socket.getsockname()
    kwargs["bind_addr"] = (real_ip, real_port)
    server = run_server(server_sock, TcpProtoFactory(proto, **kwargs))
    return server, (real_ip, real_port), url.scheme


async def multi_server(stop, *servers):
    addrs = []
    async with curio.TaskGroup() as g:
        for server, addr, scheme in servers:
            await g.spawn(server)
            addrs.append((*addr, scheme))

        address = ", ".join(f"{scheme}://{host}:{port}" for host, port, scheme in addrs)
        pid = os.getpid()
        gvars.logger.info(f"{__package__}/{__version__} listen on {address} pid: {pid}")
        await stop.wait()
        gvars.logger.info(f"shutting down, {len(connections)} connections open")
        await g.cancel_remaining()


def main(arguments=None):
    parser = argparse.ArgumentParser(
        description=desc, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "-v", dest="verbose", action="count", default=0, help="print verbose output"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("server", nargs="+", type=get_server)
    args = parser.parse_args(arguments)
    if args.verbose == 0:
        level = logging.ERROR
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    gvars.logger.setLevel(level)
    stop = curio.UniversalEvent()
    handlers = {
        signo: signal.signal(signo, lambda signo, frame: stop.set())
        for signo in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        curio.run(multi_server, stop, *args.server)
    except Exception as e:
        gvars.logger.exception(str(e))
    finally:
        for signo, handler in handlers.items():
            signal.signal(signo, handler)


if __name__ == "__main__":
    main()
