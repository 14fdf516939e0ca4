"""Custom exceptions for chainfeed."""


class ChainFeedError(Exception):
    """Base exception for all chainfeed errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or "CHAINFEED_ERROR"
        super().__init__(self.message)


class InvalidSubscriptionError(ChainFeedError):
    """Raised when an unknown or unimplemented subscription is requested."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid or not implemented subscription: {name}", "INVALID_SUBSCRIPTION")


class RPCTransportError(ChainFeedError):
    """Raised when an RPC call to the node fails."""

    def __init__(self, method: str, message: str, code: str | None = None) -> None:
        self.method = method
        super().__init__(f"RPC {method} failed: {message}", code or "RPC_TRANSPORT_ERROR")


class RPCTimeoutError(RPCTransportError):
    """Raised when an RPC call times out."""

    def __init__(self, method: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(method, f"timeout after {timeout}s", "RPC_TIMEOUT")


class RPCResponseError(RPCTransportError):
    """Raised when the node returns a body that cannot be decoded or validated."""

    def __init__(self, method: str, message: str) -> None:
        super().__init__(method, f"malformed response: {message}", "RPC_BAD_RESPONSE")


class RPCError(RPCTransportError):
    """Raised when the node answers with a JSON-RPC error object."""

    def __init__(self, method: str, error_code: int, error_message: str) -> None:
        self.error_code = error_code
        self.error_message = error_message
        super().__init__(method, f"[{error_code}] {error_message}", "RPC_ERROR")


class SubscriptionError(ChainFeedError):
    """Raised when the notification feed fails."""

    def __init__(self, endpoint: str, message: str, code: str | None = None) -> None:
        self.endpoint = endpoint
        super().__init__(f"Subscription to {endpoint} failed: {message}", code or "SUBSCRIPTION_ERROR")


class SubscriptionTimeoutError(SubscriptionError):
    """Raised when no notification arrives within the message timeout."""

    def __init__(self, endpoint: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(endpoint, f"no message received in {timeout}s", "SUBSCRIPTION_TIMEOUT")


class BlockProcessingError(ChainFeedError):
    """Raised when one or more transactions of a block could not be enriched."""

    def __init__(self, block_hash: str, errors: list[BaseException]) -> None:
        self.block_hash = block_hash
        self.errors = errors
        super().__init__(
            f"Block {block_hash} failed: {len(errors)} transaction(s) could not be processed "
            f"(first: {errors[0]!r})",
            "BLOCK_PROCESSING_ERROR",
        )
