from typing import Any


class FluriError(Exception):
    pass


class UriParseError(FluriError, ValueError):
    """
    Raised when a string cannot be parsed into a URI.
    """

    def __init__(self, uri: str, reason: str) -> None:
        super().__init__(f"Failed to parse URI {uri!r}: {reason}")
        self.uri = uri


class InvalidComponentError(FluriError, ValueError):
    """
    Raised when the URI type rejects a new value for one of its components.
    """

    def __init__(self, component: str, value: Any, reason: str) -> None:
        super().__init__(f"Invalid {component} {value!r}: {reason}")
        self.component = component
        self.value = value
