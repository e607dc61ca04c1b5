"""Declarative description of a single typed API call."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, Mapping, Optional, Type, TypeVar

from .method import HTTPMethod

T = TypeVar("T")


@dataclass(frozen=True)
class Resource(Generic[T]):
    """One endpoint call and the type its response decodes into.

    Attributes:
        path: Path resolved against the environment's base URL. May be absolute.
        value_type: The type the (possibly narrowed) JSON response is decoded into.
        key_path: Optional dot-delimited path (e.g. "data.items") into the response
            object. Only the value found there is decoded.
        method: The HTTP method (default GET).
        headers: Request headers, stored read-only. These replace any transport
            defaults.
        body: Optional raw request body.
        strict_key_path: If True, a key_path that does not resolve is an error
            instead of falling back to the full response.
    """

    path: str
    value_type: Type[T]
    key_path: Optional[str] = None
    method: HTTPMethod = HTTPMethod.GET
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    strict_key_path: bool = False

    def __post_init__(self) -> None:
        # HTTPMethod("get") raises ValueError, only the exact uppercase names pass
        object.__setattr__(self, "method", HTTPMethod(self.method))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __hash__(self) -> int:
        return hash(
            (
                self.path,
                self.value_type,
                self.key_path,
                self.method,
                frozenset(self.headers.items()),
                self.body,
                self.strict_key_path,
            )
        )
