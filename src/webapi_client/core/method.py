from enum import Enum


class HTTPMethod(str, Enum):
    """HTTP verbs a resource may use. Each value is the uppercase name sent on the wire."""

    DELETE = "DELETE"
    GET = "GET"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"

    def __str__(self) -> str:
        return self.value
