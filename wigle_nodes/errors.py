from typing import Optional


class ExecutionError(Exception):
    ...


class NodeOperationError(ExecutionError):
    """A user-visible failure of one node operation on one input item."""

    def __init__(
        self,
        message: str,
        *,
        item_index: Optional[int] = None,
        status_code: Optional[int] = None,
        description: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.item_index = item_index
        self.status_code = status_code
        self.description = description


class ResponseFormatError(ExecutionError):
    """The remote answered with a body that could not be decoded as JSON."""
