import os

#: Name of the anvil binary, looked up on ``PATH`` unless an absolute path is given.
DEFAULT_ANVIL_BINARY = os.environ.get("ANVIL_BINARY", "anvil")

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8545
LOOPBACK = "127.0.0.1"

#: JSON-RPC request timeout used by :meth:`AnvilClient.from_url`.
RPC_REQUEST_TIMEOUT = 30  # seconds
