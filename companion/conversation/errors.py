class ConversationError(Exception):
    """Base exception for failures while processing a conversation turn."""

    pass


class ModelFailure(ConversationError):
    """The model client raised, timed out, or returned a malformed result."""

    pass


class StoreFailure(ConversationError):
    """A profile, history, or session store operation failed unexpectedly."""

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Store operation {operation} failed: {cause!r}")
