"""Explorer & node related errors."""

from __future__ import annotations

from headless_dapp.errors.dapp_errors import HeadlessDappError


class ExplorerError(HeadlessDappError):
    """Error from the Ergo Explorer API or its responses."""

    def __init__(self, message: str, *, code: str = "explorer-error") -> None:
        super().__init__(message, code=code)


class ExplorerResponseError(ExplorerError):
    """An Explorer response body could not be decoded into boxes."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="explorer-response-invalid")


class ExplorerEndpointError(ExplorerError):
    """No Explorer endpoint can be derived from a spec."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="explorer-endpoint-unavailable")


class NodeError(HeadlessDappError):
    """Error from the Ergo node (signing, submission, wallet queries)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message, code="node-error")
        self.status_code = status_code


class NotEnoughBoxesError(HeadlessDappError):
    """Fewer distinct matching boxes were found than requested."""

    def __init__(self, requested: int, found: int) -> None:
        super().__init__(
            f"requested {requested} distinct matching boxes, found {found}",
            code="not-enough-boxes",
        )
        self.requested = requested
        self.found = found
