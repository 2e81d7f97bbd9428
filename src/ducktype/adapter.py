"""Reinterpret a single object as an arbitrary interface.

If it walks like a duck and it quacks like a duck, it may be used as a duck:
:func:`adapt` treats an object as an instance of an interface it never declared,
as long as it has the methods that are actually called.
"""

from typing import Any, TypeVar

from ducktype.domain import MethodSignature
from ducktype.errors import NoMatchingMethod
from ducktype.view import make_view

__all__ = ["adapt"]

T = TypeVar("T")


class _AdaptedObject:
    """Delegate source for a view of exactly one object."""

    def __init__(self, target: Any):
        self._target = target

    def dispatch_order(self) -> tuple[Any, ...]:
        return (self._target,)

    def unresolved(self, signature: MethodSignature, consulted: int) -> NoMatchingMethod:
        return NoMatchingMethod(signature)

    def __repr__(self) -> str:
        return repr(self._target)


def adapt(obj: Any, interface: type[T], *, exclude_universal: bool = False) -> T:
    """Treat ``obj`` as though it were an instance of ``interface``.

    Every call on the returned view is forwarded to the method of ``obj`` with
    the same name and a compatible signature. The lookup happens on each call,
    so nothing is checked up front: calling a method ``obj`` lacks raises
    :class:`~ducktype.errors.NoMatchingMethod`, and exceptions raised by the
    methods of ``obj`` propagate unchanged.

    Args:
        obj: The object to reinterpret.
        interface: The class to treat ``obj`` as. Any class will do.
        exclude_universal: If True, ``__eq__``, ``__hash__``, ``__repr__`` and
            the like are never forwarded, so views compare and hash by
            identity. Otherwise those ``interface`` declares go to ``obj``.

    Returns:
        A view of ``obj`` that is an instance of ``interface``.

    Raises:
        TypeError: If ``obj`` is None or ``interface`` is not a class.

    Example:
        >>> class Goose:
        ...     def quack(self) -> str:
        ...         return "honk"
        >>> duck = adapt(Goose(), Duck)
        >>> duck.quack()
        'honk'
        >>> duck.waddle()
        Traceback (most recent call last):
        ...
        ducktype.errors.NoMatchingMethod: Duck.waddle(self) is not implemented by the adapted object
    """
    if obj is None:
        raise TypeError("Cannot adapt None")
    return make_view(interface, _AdaptedObject(obj), exclude_universal)
