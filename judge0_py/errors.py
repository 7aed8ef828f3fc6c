"""Errors raised by the Judge0 client."""


class Judge0Error(Exception):
    """Base class for every error raised by a client operation."""


class RequestFailed(Judge0Error):
    """The request could not be sent or its response could not be read."""

    def __init__(self, cause: Exception):
        super().__init__(f"Error making request: {cause}")
        self.cause = cause


class SerializationFailed(Judge0Error):
    """A request body could not be encoded or a response had the wrong shape."""

    def __init__(self, cause: Exception):
        super().__init__(f"Error serializing data: {cause}")
        self.cause = cause


class InvalidHeaderName(Judge0Error):
    """A configured header name is not a valid HTTP header name."""

    def __init__(self, name: str):
        super().__init__(f"Invalid header name: {name!r}")
        self.name = name


class InvalidHeaderValue(Judge0Error):
    """A configured header value contains characters illegal in HTTP headers."""

    def __init__(self, value: str):
        # Values are credentials; keep them out of the message
        super().__init__("Invalid header value")
        self.value = value
