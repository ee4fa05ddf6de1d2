from __future__ import annotations

import logging
import typing as t

from anyio import to_thread

from precondition._core._headers import IF_RANGE, RANGE, Headers
from precondition._core._spec import (
    NOT_MODIFIED,
    ConditionalEvaluator,
    ConditionalOptions,
    snapshot,
    status_for_verdict,
)
from precondition._core.models import ConditionalHeaders, Reject, RejectReason, Validators, Verdict
from precondition._utils import HEADERS_ENCODING, generate_http_date

# Configure logger for this module
logger = logging.getLogger(__name__)


class _ASGIScope(t.TypedDict, total=False):
    """ASGI HTTP scope type."""

    type: str
    asgi: dict[str, str]
    http_version: str
    method: str
    scheme: str
    path: str
    query_string: bytes
    root_path: str
    headers: list[tuple[bytes, bytes]]
    server: tuple[str, int | None] | None
    client: tuple[str, int] | None
    state: dict[str, t.Any]
    extensions: dict[str, t.Any]


_Scope = _ASGIScope
_Receive = t.Callable[[], t.Awaitable[t.Dict[str, t.Any]]]
_Send = t.Callable[[t.Dict[str, t.Any]], t.Awaitable[None]]
_ASGIApp = t.Callable[[_Scope, _Receive, _Send], t.Awaitable[None]]
_Resolver = t.Callable[[_Scope], t.Awaitable[t.Optional[Validators]]]


class ConditionalMiddleware:
    """
    ASGI middleware that evaluates conditional request headers (RFC 7232)
    before the wrapped application runs.

    For every HTTP request the resolver is asked for the validators of the
    addressed resource. Returning None skips evaluation for that request.

    - 304 and 412 verdicts are answered directly with an empty body
    - a failed If-Match or If-Unmodified-Since is answered with 412
    - a failed If-Range removes Range and If-Range, so the app serves the full resource
    - otherwise the request reaches the app unchanged

    Capability callbacks run in a worker thread, so they may block on I/O.

    Args:
        app: The ASGI application to wrap.
        resolver: Async callable returning the Validators for a scope, or None.
        options: Evaluation options. Defaults to ConditionalOptions().

    Example:
        ```python
        from precondition import Validators
        from precondition.asgi import ConditionalMiddleware

        async def resolve(scope):
            document = documents.get(scope["path"])
            if document is None:
                return Validators.absent()
            return Validators.from_values(etag=document.etag, last_modified=document.updated_at)

        app = ConditionalMiddleware(app=my_asgi_app, resolver=resolve)
        ```
    """

    def __init__(
        self,
        app: _ASGIApp,
        resolver: _Resolver,
        options: ConditionalOptions | None = None,
    ) -> None:
        self.app = app
        self.resolver = resolver
        self._evaluator = ConditionalEvaluator(options)

        logger.info(
            "Initialized ConditionalMiddleware with cache_validation_methods=%s, range_methods=%s",
            self._evaluator.options.cache_validation_methods,
            self._evaluator.options.range_methods,
        )

    async def __call__(self, scope: _Scope, receive: _Receive, send: _Send) -> None:
        """
        Handle an ASGI request.

        Args:
            scope: The ASGI scope dictionary.
            receive: The ASGI receive callable.
            send: The ASGI send callable.
        """
        # Only handle HTTP requests
        if scope["type"] != "http":
            logger.debug("Skipping non-HTTP request: type=%s", scope["type"])
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        path = scope.get("path", "/")

        validators = await self.resolver(scope)
        if validators is None:
            logger.debug("No validators for method=%s path=%s, skipping evaluation", method, path)
            await self.app(scope, receive, send)
            return

        validators = snapshot(validators)
        headers = self._scope_headers(scope)
        conditional_headers = ConditionalHeaders.from_headers(method, headers)

        verdict = await to_thread.run_sync(self._evaluator.evaluate, conditional_headers, validators)
        logger.debug("Evaluated preconditions: method=%s path=%s verdict=%s", method, path, verdict)

        status_code = status_for_verdict(verdict)
        if status_code is not None:
            response_headers: list[tuple[bytes, bytes]] = []
            if status_code == NOT_MODIFIED:
                response_headers = await to_thread.run_sync(self._not_modified_headers, validators)
            await self._send_empty_response(send, status_code, response_headers)
            return

        if self._discards_range(verdict):
            logger.debug("If-Range does not match, serving the full resource: path=%s", path)
            scope = self._without_range(scope)

        await self.app(scope, receive, send)

    @staticmethod
    def _discards_range(verdict: Verdict) -> bool:
        return isinstance(verdict, Reject) and verdict.reason is RejectReason.RANGE_MISMATCH

    @staticmethod
    def _scope_headers(scope: _Scope) -> Headers:
        headers = Headers({})
        for key, value in scope.get("headers", []):
            headers[key.decode(HEADERS_ENCODING)] = value.decode(HEADERS_ENCODING)
        return headers

    @staticmethod
    def _without_range(scope: _Scope) -> _Scope:
        dropped = {RANGE.lower().encode(), IF_RANGE.lower().encode()}
        new_scope = t.cast(_Scope, dict(scope))
        new_scope["headers"] = [(key, value) for key, value in scope.get("headers", []) if key.lower() not in dropped]
        return new_scope

    @staticmethod
    def _not_modified_headers(validators: Validators) -> list[tuple[bytes, bytes]]:
        """
        The validator fields a 200 response would carry, RFC 7232 Section 4.1.
        Reads through the evaluated snapshot, so the ETag is the one that was compared.
        """
        headers: list[tuple[bytes, bytes]] = []
        if validators.etag is not None:
            try:
                headers.append((b"etag", validators.etag().encode(HEADERS_ENCODING)))
            except Exception:
                logger.debug("Could not produce the entity tag for the 304 response", exc_info=True)
        if validators.last_modified is not None:
            try:
                last_modified = generate_http_date(validators.last_modified())
                headers.append((b"last-modified", last_modified.encode(HEADERS_ENCODING)))
            except Exception:
                logger.debug("Could not produce the last modification date for the 304 response", exc_info=True)
        return headers

    async def _send_empty_response(
        self,
        send: _Send,
        status_code: int,
        headers: list[tuple[bytes, bytes]],
    ) -> None:
        logger.info("Precondition short-circuit: status=%d", status_code)

        await send(
            {
                "type": "http.response.start",
                "status": status_code,
                "headers": headers,
            }
        )
        await send(
            {
                "type": "http.response.body",
                "body": b"",
                "more_body": False,
            }
        )
