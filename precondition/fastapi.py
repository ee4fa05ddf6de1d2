from __future__ import annotations

import logging
import typing as t

from precondition._core._headers import Headers
from precondition._core._spec import ConditionalEvaluator, ConditionalOptions
from precondition._core.models import ConditionalHeaders, Continue, Reject, ShortCircuit, Validators

try:
    import fastapi
except ImportError as e:
    raise ImportError(
        "fastapi is required to use precondition.fastapi module. "
        "Please install precondition with the 'fastapi' extra, "
        "e.g., 'pip install precondition[fastapi]'."
    ) from e

logger = logging.getLogger(__name__)


def check_preconditions(
    request: fastapi.Request,
    validators: Validators,
    options: ConditionalOptions | None = None,
) -> t.Union[Continue, Reject]:
    """
    Evaluate the conditional headers of a FastAPI request (RFC 7232).

    Short-circuit verdicts stop the endpoint by raising HTTPException with
    304 (Not Modified) or 412 (Precondition Failed). Everything else is
    returned, so the endpoint decides how to answer a Reject.

    Args:
        request: The incoming request.
        validators: The validator capabilities of the addressed resource.
        options: Evaluation options. Defaults to ConditionalOptions().

    Returns:
        Continue when the request may proceed, Reject when a strong
        precondition failed (WAS_MODIFIED) or the Range header must be
        ignored (RANGE_MISMATCH).

    Raises:
        fastapi.HTTPException: For short-circuit verdicts.

    Examples:
        >>> from fastapi import FastAPI, HTTPException, Request
        >>> from precondition import Reject, RejectReason, Validators
        >>> from precondition.fastapi import check_preconditions
        >>>
        >>> app = FastAPI()
        >>>
        >>> @app.put("/documents/{name}")
        >>> async def put_document(name: str, request: Request):
        ...     validators = Validators.from_values(etag=store.etag(name)) if name in store else Validators.absent()
        ...     verdict = check_preconditions(request, validators)
        ...     if isinstance(verdict, Reject) and verdict.reason is RejectReason.WAS_MODIFIED:
        ...         raise HTTPException(status_code=412)
        ...     store.put(name, await request.body())
    """
    headers = Headers({})
    for key, value in request.headers.items():
        headers[key] = value

    conditional_headers = ConditionalHeaders.from_headers(request.method, headers)
    verdict = ConditionalEvaluator(options).evaluate(conditional_headers, validators)

    if isinstance(verdict, ShortCircuit):
        logger.debug("Precondition short-circuit: method=%s status=%d", request.method, verdict.status_code)
        raise fastapi.HTTPException(status_code=verdict.status_code)

    return verdict
