__all__ = ("NoResource", "PreconditionError", "WasModified", "RangeMismatch")


class NoResource(Exception):
    """
    Raised by an etag producer when no resource exists at the requested location.
    """


class PreconditionError(Exception): ...


class WasModified(PreconditionError):
    """
    The resource was modified since the client captured its validators.

    The server must respond with either:
    a) 412 (Precondition Failed), or
    b) one of the 2xx (Successful) status codes if it has verified that a state
       change is being requested and the final state is already reflected in
       the current state of the target resource.
    """

    def __init__(self, message: str = "Resource was modified, check if the final state would match") -> None:
        super().__init__(message)


class RangeMismatch(PreconditionError):
    def __init__(self, message: str = "If-Range validation failed, respond with the entire resource") -> None:
        super().__init__(message)
