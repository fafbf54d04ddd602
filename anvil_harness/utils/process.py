import errno
import socket
from contextlib import closing
from socket import SocketKind

from anvil_harness.constants import LOOPBACK


def unused_port() -> int:
    """Return a loopback TCP port that is currently free to listen on."""
    socket_kind = SocketKind.SOCK_STREAM

    while True:
        sock = socket.socket(socket.AF_INET, socket_kind)
        with closing(sock):
            # Force the port into TIME_WAIT mode, ensuring that it will not
            # be considered 'free' by the OS for the next 60 seconds. This
            # does however require that the process using the port sets
            # SO_REUSEADDR on it's sockets, which anvil does.
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            try:
                sock.bind((LOOPBACK, 0))
            except OSError as ex:
                if ex.errno == errno.EADDRINUSE:
                    continue
                raise

            sock_addr = sock.getsockname()
            port = int(sock_addr[1])

            sock.listen(1)
            sock2 = socket.socket(socket.AF_INET, socket_kind)
            with closing(sock2):
                sock2.connect(sock_addr)
                conn, _ = sock.accept()
                conn.close()

        return port
