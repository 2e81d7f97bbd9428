from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ducktype.domain import MethodSignature

__all__ = ["NoMatchingMethod"]


class NoMatchingMethod(Exception):
    """Raised when a view cannot find an implementation for an interface method.

    Attributes:
        signature: The interface method signature that could not be satisfied.
        delegates: For a mixin view, the number of delegates that were consulted.
            None when the view adapts a single object.
    """

    def __init__(self, signature: "MethodSignature", delegates: Optional[int] = None):
        self.signature = signature
        self.delegates = delegates
        if delegates is None:
            message = f"{signature} is not implemented by the adapted object"
        else:
            message = (
                f"{signature} is not implemented by any of the "
                f"{delegates} registered delegates"
            )
        super().__init__(message)
