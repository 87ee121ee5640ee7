"""Error kinds raised by the intent resolution pipeline.

Every failure reaches the caller as one of these; nothing is retried
or swallowed internally.
"""


class IntentError(Exception):
    """Base class for all api-intent-agent errors."""


class SchemaLoadError(IntentError):
    """The API description cannot be read or traversed as path -> method -> operation."""


class InvalidInputError(IntentError):
    """The user text is empty or blank."""


class MissingCredentialError(IntentError):
    """No API key was supplied for the completion service."""


class CompletionError(IntentError):
    """The completion service failed (network, auth, quota, empty reply)."""


class ResponseDecodeError(IntentError):
    """The model's reply could not be decoded into an IntentMatch."""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text
