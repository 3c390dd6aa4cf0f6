"""
Error taxonomy for the chat relay.
Relay errors are converted into {error, status} payloads at the relay boundary.
"""


class RelayError(Exception):
    """Base class for failures surfaced to the caller as a structured payload."""

    status: int = 400
    message: str = "Failed to process your request."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    def to_payload(self) -> dict:
        """Render the error as the caller-facing payload."""
        return {"error": str(self), "status": self.status}


class EmptyInputError(RelayError):
    """User message is blank after trimming."""
    message = "Missing chat message..."


class MissingCredentialError(RelayError):
    """No bearer token available for the upstream API."""
    message = "Missing OPENROUTER_API_KEY..."


class ConversationFullError(RelayError):
    """Conversation already holds the maximum number of messages."""
    message = "Conversation has reached its maximum length. Please start a new conversation."


class UpstreamError(RelayError):
    """Chat-completion call failed or returned an unusable body."""
    status = 500
    message = "Failed to process your request."


class ExtractionError(Exception):
    """Resume text could not be obtained. Always recovered into empty text."""
