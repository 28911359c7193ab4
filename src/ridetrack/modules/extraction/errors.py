from __future__ import annotations


class ExtractionRejected(Exception):
    """Terminal outcome for one email; ``reason`` is a stable machine-readable code."""

    reason: str = "rejected"
    default_message: str = "Email rejected"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class MalformedEmailError(ExtractionRejected):
    reason = "malformed_email"
    default_message = "Email could not be parsed"


class PlatformNotRecognizedError(ExtractionRejected):
    reason = "platform_not_recognized"
    default_message = "Platform not recognized"


class NoRideDataError(ExtractionRejected):
    reason = "no_ride_data"
    default_message = "Could not extract ride data from email"


class UnknownRecipientError(ExtractionRejected):
    reason = "user_not_found"
    default_message = "User not found"
