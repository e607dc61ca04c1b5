"""JSON decoding into typed values.

The decoder is configured once per client and reused for every resource. Type
validation is delegated to pydantic, so `value_type` can be anything a
`pydantic.TypeAdapter` accepts: builtins and generics (`List[int]`,
`Dict[str, str]`), dataclasses, TypedDicts or pydantic models.
"""

import json
import re
from enum import Enum
from typing import Any, Callable, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from .errors import DecodingError

T = TypeVar("T")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class KeyDecodingStrategy(Enum):
    USE_DEFAULT_KEYS = "use_default_keys"
    CONVERT_FROM_CAMEL_CASE = "convert_from_camel_case"


def camel_to_snake(key: str) -> str:
    """Convert "userId" / "HTTPStatus" style keys to "user_id" / "http_status"."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _transform_keys(value: Any, convert: Callable[[str], str]) -> Any:
    if isinstance(value, dict):
        return {convert(k): _transform_keys(v, convert) for k, v in value.items()}
    if isinstance(value, list):
        return [_transform_keys(v, convert) for v in value]
    return value


class JSONDecoder:
    """Decode JSON bytes into a requested type.

    Attributes:
        key_strategy: How object keys are rewritten before validation. Either a
            KeyDecodingStrategy or a callable mapping one key to another.
    """

    def __init__(
        self,
        key_strategy: Union[KeyDecodingStrategy, Callable[[str], str]] = KeyDecodingStrategy.USE_DEFAULT_KEYS,
    ):
        self.key_strategy = key_strategy

    def _key_converter(self) -> Union[Callable[[str], str], None]:
        if self.key_strategy is KeyDecodingStrategy.USE_DEFAULT_KEYS:
            return None
        if self.key_strategy is KeyDecodingStrategy.CONVERT_FROM_CAMEL_CASE:
            return camel_to_snake
        return self.key_strategy

    def decode(self, value_type: Type[T], data: bytes) -> T:
        """Decode `data` into `value_type`.

        Validation runs in pydantic's strict JSON mode, so "1" won't pass as 1.

        Raises:
            DecodingError: If the bytes aren't JSON or don't validate as `value_type`.
        """
        adapter = TypeAdapter(value_type)
        convert = self._key_converter()
        try:
            if convert is not None:
                data = json.dumps(_transform_keys(json.loads(data), convert)).encode("utf-8")
            return adapter.validate_json(data, strict=True)
        except ValidationError as e:
            raise DecodingError(f"Response does not match {value_type!r}: {e}", value_type=value_type) from e
        except ValueError as e:
            raise DecodingError(f"Response is not valid JSON: {e}", value_type=value_type) from e
