from typing import Optional


class ConfigurationError(RuntimeError):
    """Raised when the service is misconfigured (missing credentials, bad values)."""


class PlannerError(Exception):
    """Base for every failure the planning pipeline reports to its caller.

    ``kind`` is a stable machine tag and ``user_message`` the only text that
    may be shown to an end user. The exception message itself is for logs.
    """

    kind = "planner_error"
    user_message = "We couldn't generate your itinerary. Please try again."
    retryable = True

    def to_payload(self) -> dict:
        return {"error": self.kind, "message": self.user_message, "retryable": self.retryable}


class InvalidRequest(PlannerError):
    """Trip parameters failed the shape check."""

    kind = "invalid_request"
    user_message = "Some trip details are missing or invalid. Please review them and try again."
    retryable = False


class GenerationUnavailable(PlannerError):
    """The model call failed, returned an error status or timed out."""

    kind = "generation_unavailable"


class ExtractionFailed(PlannerError):
    """No parseable JSON object could be recovered from the model output."""

    kind = "extraction_failed"

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text


class MalformedItinerary(PlannerError):
    """A JSON document was recovered but lacks the minimal itinerary shape."""

    kind = "malformed_itinerary"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Missing or invalid field: {field}")
        self.field = field


class DestinationFactsUnavailable(PlannerError):
    """The destination facts provider failed or timed out. Non-fatal for planning."""

    kind = "destination_facts_unavailable"
    user_message = "Live destination details are temporarily unavailable."
