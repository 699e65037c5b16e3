"""
A small server that turns raw tcp byte streams into framed messages.

Two framings are supported: newline delimited text (an echo service)
and HTTP/1.x requests with Content-Length bodies.

uri syntax:

{scheme}://[hostname]:{port}[/?[max_header={n}][&max_line={n}]]

supported protocols:

protocol        scheme
http/1.x        http://
line echo       line://

examples:

# http server on port 1234
streamserve -v http://:1234

# line echo server, refuse lines longer than 1KB
streamserve -v 'line://127.0.0.1:1235/?max_line=1024'

# both at once
streamserve -vv http://:1234 line://:1235
"""
__version__ = "0.1.0"
