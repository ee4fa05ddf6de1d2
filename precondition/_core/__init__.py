from precondition._core._headers import (
    Headers as Headers,
    parse_entity_tags as parse_entity_tags,
)
from precondition._core._spec import (
    ConditionalEvaluator as ConditionalEvaluator,
    ConditionalOptions as ConditionalOptions,
    evaluate as evaluate,
    if_match as if_match,
    if_modified_since as if_modified_since,
    if_none_match as if_none_match,
    if_range as if_range,
    if_unmodified_since as if_unmodified_since,
    snapshot as snapshot,
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

__all__ = (
    ## Evaluation
    "ConditionalEvaluator",
    "ConditionalOptions",
    "evaluate",
    "status_for_verdict",
    ## Predicates
    "if_match",
    "if_unmodified_since",
    "if_none_match",
    "if_modified_since",
    "if_range",
    "snapshot",
    ## Models
    "ConditionalHeaders",
    "Validators",
    ## Verdicts
    "Continue",
    "ShortCircuit",
    "Reject",
    "RejectReason",
    "Verdict",
    ## Headers
    "Headers",
    "parse_entity_tags",
)
