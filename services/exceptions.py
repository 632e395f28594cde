"""
Exceptions raised by the chain-facing services

Routers translate these into HTTP status codes.
"""


class ObjectNotFoundError(LookupError):
    """Object id does not resolve, has no content, or is not of the expected kind"""

    def __init__(self, object_id: str, reason: str = "not found"):
        self.object_id = object_id
        self.reason = reason
        super().__init__(f"Object {object_id} {reason}")


class UpstreamUnavailableError(RuntimeError):
    """The Sui fullnode call failed or returned a malformed payload"""


class TransactionFailedError(UpstreamUnavailableError):
    """The chain executed the transaction but reported a non-success status"""

    def __init__(self, digest: str, error: str = ""):
        self.digest = digest
        self.error = error
        super().__init__(f"Transaction {digest} failed: {error or 'unknown error'}")


class SignerNotConfiguredError(RuntimeError):
    """A write was requested but no signing key is configured"""
