"""Media type parsing for upload bodies."""
import re
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from files_client.errors import EncodingError

DEFAULT_MEDIA_TYPE = "application/octet-stream"

_TOKEN = r"[a-zA-Z0-9\-!#$%&'*+.^_`{|}~]+"
_QUOTED = r'"([^"]*)"'
_TYPE_SUBTYPE = re.compile(rf"({_TOKEN})/({_TOKEN})")
_PARAMETER = re.compile(rf";\s*(?:({_TOKEN})=(?:({_TOKEN})|{_QUOTED}))?")
_TOKEN_ONLY = re.compile(rf"{_TOKEN}")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class MediaType(BaseModel):
    """A parsed ``type/subtype; name=value`` media type."""
    type: str
    subtype: str
    parameters: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def essence(self) -> str:
        return f"{self.type}/{self.subtype}"

    @property
    def charset(self) -> Optional[str]:
        return self.parameters.get("charset")

    def __str__(self) -> str:
        params = "".join(f"; {name}={_quote(value)}" for name, value in self.parameters.items())
        return f"{self.essence}{params}"

    @classmethod
    def parse(cls, value: Optional[str]) -> "MediaType":
        """Parse a media type string.

        Args:
            value: A string such as ``text/plain; charset=utf-8``. ``None`` is
                treated as an unknown type and yields ``application/octet-stream``.

        Returns:
            MediaType: The parsed media type, lower-cased type and subtype.

        Raises:
            EncodingError: If the value is not a well-formed media type.
        """
        if value is None:
            value = DEFAULT_MEDIA_TYPE
        if not isinstance(value, str):
            raise EncodingError(f"Media type must be a string, got {type(value).__name__}")
        if _CONTROL_CHARS.search(value):
            raise EncodingError(f"Media type contains control characters: {value!r}")

        text = value.strip()
        match = _TYPE_SUBTYPE.match(text)
        if not match:
            raise EncodingError(f"No subtype found for media type: {value!r}")

        parameters: Dict[str, str] = {}
        pos = match.end()
        while pos < len(text):
            param = _PARAMETER.match(text, pos)
            if not param:
                raise EncodingError(
                    f"Parameter is not formatted correctly: {text[pos:]!r} for: {value!r}"
                )
            name = param.group(1)
            if name is not None:
                raw = param.group(2) if param.group(2) is not None else param.group(3)
                parameters[name.lower()] = raw
            pos = param.end()

        return cls(
            type=match.group(1).lower(),
            subtype=match.group(2).lower(),
            parameters=parameters,
        )


def _quote(value: str) -> str:
    if _TOKEN_ONLY.fullmatch(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
