"""
Domain exceptions - Semantic error types for the charity registry.

Business-rule failures are reported as Result values carrying an ErrorCode.
These exceptions exist for callers that prefer raising (Result.unwrap) and
for unwinding an atomic unit of work when a collaborator refuses a step.
"""

from .ports import ErrorCode


class RegistryError(Exception):
    """Base class for registry domain errors."""

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        self.code = code
        super().__init__(message or code.name)


class TransferFailed(RegistryError):
    """The value transfer service refused the registration fee transfer."""

    def __init__(self, amount: int, sender: str, recipient: str) -> None:
        self.amount = amount
        self.sender = sender
        self.recipient = recipient
        super().__init__(
            ErrorCode.TRANSFER_FAILED,
            f"Transfer of {amount} from {sender} to {recipient} refused",
        )
