"""Errors raised along the send path. Each carries the HTTP status it maps to."""


class ChatError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(ChatError):
    status_code = 400


class ConfigurationError(ChatError):
    pass


class UpstreamError(ChatError):
    def __init__(self, status_code: int, message: str | None = None):
        super().__init__(message or f"API Error: {status_code}")
        self.status_code = status_code


class EmptyResponse(ChatError):
    def __init__(self, message: str = "No reply received from the model"):
        super().__init__(message)
