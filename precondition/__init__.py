from precondition._core._headers import Headers as Headers
from precondition._core._spec import (
    ConditionalEvaluator as ConditionalEvaluator,
    ConditionalOptions as ConditionalOptions,
    evaluate as evaluate,
    status_for_verdict as status_for_verdict,
)
from precondition._core.models import (
    ConditionalHeaders as ConditionalHeaders,
    Continue as Continue,
    Reject as Reject,
    RejectReason as RejectReason,
    ShortCircuit as ShortCircuit,
    Validators as Validators,
    Verdict as Verdict,
)
from precondition._exceptions import (
    NoResource as NoResource,
    PreconditionError as PreconditionError,
    RangeMismatch as RangeMismatch,
    WasModified as WasModified,
)
from precondition._utils import generate_http_date as generate_http_date, parse_http_date as parse_http_date

__version__ = "0.1.0"

__all__ = (
    # Evaluation
    "ConditionalEvaluator",
    "ConditionalOptions",
    "evaluate",
    "status_for_verdict",
    # Models
    "ConditionalHeaders",
    "Validators",
    "Headers",
    ## Verdicts
    "Continue",
    "ShortCircuit",
    "Reject",
    "RejectReason",
    "Verdict",
    # Exceptions
    "NoResource",
    "PreconditionError",
    "WasModified",
    "RangeMismatch",
    # Dates
    "parse_http_date",
    "generate_http_date",
)
