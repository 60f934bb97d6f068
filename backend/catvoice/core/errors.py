"""Exceptions raised by the translation and consultation pipelines.

None of these are caught inside the services. The API routers turn them
into a generic failure message so no model output leaks to the client.
"""


class CatVoiceError(Exception):
    """Base class for pipeline failures."""


class GenerationFailedError(CatVoiceError):
    """The model call itself failed (network, auth, quota, timeout, empty reply)."""


class ResponseParseError(CatVoiceError):
    """The model replied, but not with a usable JSON object."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class MalformedResponseError(ResponseParseError):
    """No brace-delimited substring in the model output."""


class InvalidJSONError(ResponseParseError):
    """A brace-delimited substring was found but is not a JSON object."""
