"""Fluent builder for Connect API paths and query strings."""
from typing import Any, Dict, Iterable, Optional, Tuple, Union
from urllib.parse import quote, urlencode

from files_client.errors import InvalidArgumentError

PAGE_PARAM = "page"
VERSION_NUMBER_PARAM = "versionNumber"


class ConnectUriBuilder:
    """Accumulates path segments and query parameters in call order.

    Every ``append_*`` method returns the builder so calls can be chained.
    Optional values that are ``None`` are skipped, so the resulting URL never
    carries empty segments or empty parameters.
    """

    def __init__(self, base_path: str):
        self._path = base_path.rstrip("/")
        self._query: Dict[str, str] = {}

    def append_path(self, segment: str) -> "ConnectUriBuilder":
        """Append a fixed path such as ``filter/groups``; slashes separate segments."""
        segment = str(segment).strip("/")
        if segment:
            self._path = f"{self._path}/{quote(segment, safe='/')}"
        return self

    def append_id(self, record_id: str) -> "ConnectUriBuilder":
        """Append a record id as exactly one encoded segment."""
        self._path = f"{self._path}/{quote(str(record_id), safe='')}"
        return self

    def append_ids(self, record_ids: Iterable[str]) -> "ConnectUriBuilder":
        """Append several record ids as one comma-joined segment."""
        joined = ",".join(quote(str(record_id), safe="") for record_id in record_ids)
        self._path = f"{self._path}/{joined}"
        return self

    def append_user_id(self, user_id: Optional[str]) -> "ConnectUriBuilder":
        """Append the user segment; ``None`` leaves the context user implied."""
        if user_id is not None:
            self.append_id(user_id)
        return self

    def append_query_param(self, name: str, value: Any) -> "ConnectUriBuilder":
        if value is not None:
            self._query[name] = str(value)
        return self

    def append_page_num(self, page_num: Optional[int]) -> "ConnectUriBuilder":
        return self.append_query_param(PAGE_PARAM, _non_negative(PAGE_PARAM, page_num))

    def append_version_num(self, version: Union[str, int, None]) -> "ConnectUriBuilder":
        return self.append_query_param(VERSION_NUMBER_PARAM, _non_negative(VERSION_NUMBER_PARAM, version))

    @property
    def path(self) -> str:
        return self._path

    @property
    def query_params(self) -> Dict[str, str]:
        return dict(self._query)

    def build(self) -> Tuple[str, Dict[str, str]]:
        return self.path, self.query_params

    def __str__(self) -> str:
        if not self._query:
            return self._path
        return f"{self._path}?{urlencode(self._query)}"

    def __repr__(self) -> str:
        return f"ConnectUriBuilder({str(self)!r})"


def _non_negative(name: str, value: Union[str, int, None]) -> Optional[str]:
    """Check an optional page or version number; digit strings are accepted."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value!r}")
        return str(value)
    if isinstance(value, str) and value.isdigit() and value.isascii():
        return value
    raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value!r}")
