import logging
import sys

PACKET_SIZE = 8192
MAX_HEADER_SIZE = 1024 * 8
MAX_LINE_SIZE = 1024 * 8
logger = logging.getLogger(__package__)
logger.addHandler(logging.StreamHandler(sys.stdout))
default_ports = {"http": 1234, "line": 1235}
default_port = 0
