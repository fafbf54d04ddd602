from typing import Any, Optional


class AnvilRPCError(Exception):
    """The node answered a JSON-RPC request with an error object.

    The error payload is kept exactly as the node returned it; transport
    level failures are not wrapped in this class and propagate as raised
    by the provider.
    """

    def __init__(self, method: str, error: Any):
        self.method = method
        self.error = error
        super().__init__(f"{method} failed: {self.message}")

    @property
    def code(self) -> Optional[int]:
        if isinstance(self.error, dict):
            return self.error.get("code")
        return None

    @property
    def message(self) -> str:
        if isinstance(self.error, dict):
            return str(self.error.get("message", self.error))
        return str(self.error)

    @property
    def data(self) -> Optional[Any]:
        if isinstance(self.error, dict):
            return self.error.get("data")
        return None
