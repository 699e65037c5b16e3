from .http import HTTPServer
from .line import LineEchoServer

server_protos = {"http": HTTPServer, "line": LineEchoServer}
