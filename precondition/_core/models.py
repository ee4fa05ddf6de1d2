from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import (
    Callable,
    List,
    Mapping,
    Optional,
    Union,
)

from precondition._core._headers import (
    IF_MATCH,
    IF_MODIFIED_SINCE,
    IF_NONE_MATCH,
    IF_RANGE,
    IF_UNMODIFIED_SINCE,
    RANGE,
    Headers,
)
from precondition._exceptions import NoResource, PreconditionError, RangeMismatch, WasModified

Timestamp = Union[datetime, float, int]
EtagProducer = Callable[[], str]
LastModifiedProducer = Callable[[], Timestamp]


@dataclass(frozen=True)
class Validators:
    """
    The validator capabilities of a single resource.

    A resource can produce an entity tag, a last-modified timestamp, both or
    neither. A capability that is None is unsupported, and the conditional
    headers relying on it are ignored.

    Attributes:
    ----------
    etag : Callable[[], str] | None
        Returns the current entity tag (e.g. '"v1"'). Raises NoResource when
        nothing currently exists at the requested location. Any other
        exception is treated as a failed lookup.

    last_modified : Callable[[], datetime | float] | None
        Returns the time of the last modification. Only called when the
        resource exists.

    Examples:
    --------
    >>> # Wrap the methods of your own model
    >>> validators = Validators(etag=document.compute_etag, last_modified=lambda: document.updated_at)

    >>> # Static snapshot
    >>> validators = Validators.from_values(etag='"abc"')

    >>> # Nothing exists yet, e.g. a PUT with "If-None-Match: *"
    >>> validators = Validators.absent()
    """

    etag: Optional[EtagProducer] = None
    last_modified: Optional[LastModifiedProducer] = None

    @property
    def supports_etag(self) -> bool:
        return self.etag is not None

    @property
    def supports_last_modified(self) -> bool:
        return self.last_modified is not None

    @classmethod
    def from_values(
        cls,
        etag: Optional[str] = None,
        last_modified: Optional[Timestamp] = None,
    ) -> "Validators":
        return cls(
            etag=None if etag is None else (lambda: etag),
            last_modified=None if last_modified is None else (lambda: last_modified),
        )

    @classmethod
    def absent(cls) -> "Validators":
        def no_resource() -> str:
            raise NoResource()

        return cls(etag=no_resource)


@dataclass(frozen=True)
class ConditionalHeaders:
    """
    The conditional request fields of one request.
    Empty field values are treated as absent.
    """

    method: str
    if_match: Optional[str] = None
    if_unmodified_since: Optional[str] = None
    if_none_match: Optional[str] = None
    if_modified_since: Optional[str] = None
    if_range: Optional[str] = None
    has_range: bool = False

    @classmethod
    def from_headers(
        cls,
        method: str,
        headers: Mapping[str, Union[str, List[str]]],
    ) -> "ConditionalHeaders":
        if not isinstance(headers, Headers):
            headers = Headers(headers)

        def field(name: str) -> Optional[str]:
            return headers.get(name) or None

        return cls(
            method=method.upper(),
            if_match=field(IF_MATCH),
            if_unmodified_since=field(IF_UNMODIFIED_SINCE),
            if_none_match=field(IF_NONE_MATCH),
            if_modified_since=field(IF_MODIFIED_SINCE),
            if_range=field(IF_RANGE),
            has_range=bool(headers.get(RANGE)),
        )


class RejectReason(enum.Enum):
    WAS_MODIFIED = "was_modified"
    """A strong precondition (If-Match, If-Unmodified-Since) failed."""

    RANGE_MISMATCH = "range_mismatch"
    """If-Range failed, the Range header must be ignored."""


@dataclass(frozen=True)
class Continue:
    """
    No precondition stopped the request, proceed with normal handling.

    range_validated is True when the request carried both Range and If-Range
    and the If-Range validator still matches, so a partial response may be served.
    """

    range_validated: bool = False


@dataclass(frozen=True)
class ShortCircuit:
    """
    Processing must stop and the status code must be sent without a body.
    """

    status_code: int


@dataclass(frozen=True)
class Reject:
    """
    A precondition failed and the caller decides on the final response.

    WAS_MODIFIED usually becomes 412, unless the server verifies that the
    requested state change is already reflected by the resource.
    RANGE_MISMATCH means the full resource must be served instead of a range.
    """

    reason: RejectReason

    @property
    def exception(self) -> PreconditionError:
        if self.reason is RejectReason.WAS_MODIFIED:
            return WasModified()
        return RangeMismatch()


Verdict = Union[Continue, ShortCircuit, Reject]
