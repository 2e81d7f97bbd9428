"""Aggregate the behaviour of several objects behind any interface.

A :class:`Mixin` collects delegate objects and lets callers treat the collection
as an instance of whatever interface they need. Each method call is answered by
the first delegate, in registration order, that has a matching method; the
others are never consulted for that call. Which delegate answers is therefore
controlled entirely by the order of registration.

Unlike inheritance-based mixins, delegates need not share a base class or
declare the interfaces they are used as.

Example:
    >>> turducken = mixin(Duck(), Goose())
    >>> turducken.adapt(Duck).quack()     # Duck was registered first
    'quack'
    >>> turducken.adapt(Goose).eat_bread(Bread())  # only Goose can
    'eats the bread'

A mixin is not thread-safe: callers sharing one between threads must serialise
:meth:`Mixin.register` against calls on its views.
"""

import logging
from typing import Any, Iterator, TypeVar

from ducktype.domain import MethodSignature
from ducktype.errors import NoMatchingMethod
from ducktype.view import make_view

__all__ = ["Mixin", "mixin"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Mixin:
    """An ordered, append-only collection of delegates usable as any interface.

    Attributes:
        exclude_universal: Whether views keep identity semantics for ``__eq__``,
            ``__hash__``, ``__repr__`` and the like instead of forwarding those
            the interface declares.
    """

    def __init__(self, *delegates: Any, exclude_universal: bool = False):
        self._delegates: list[Any] = []
        self.exclude_universal = exclude_universal
        self.register(*delegates)

    def register(self, *delegates: Any) -> "Mixin":
        """Add delegates after those already registered.

        None entries are ignored. Duplicates are kept. Registering nothing has no
        effect.

        Args:
            delegates: The objects whose behaviour the mixin takes on.

        Returns:
            This mixin, for chaining.
        """
        added = [delegate for delegate in delegates if delegate is not None]
        self._delegates.extend(added)
        if added:
            logger.debug(
                "Registered %s; %d delegates in total",
                [type(delegate).__qualname__ for delegate in added],
                len(self._delegates),
            )
        return self

    inherit = register

    def adapt(self, interface: type[T]) -> T:
        """Treat this mixin as though it were an instance of ``interface``.

        The view reads the delegate list at call time, so delegates registered
        after the view was created are visible to it. Calling a method no
        delegate implements raises :class:`~ducktype.errors.NoMatchingMethod`.

        Raises:
            TypeError: If ``interface`` is not a class.
        """
        return make_view(interface, self, self.exclude_universal)

    @property
    def delegates(self) -> tuple[Any, ...]:
        """The registered delegates, in dispatch order."""
        return tuple(self._delegates)

    def dispatch_order(self) -> tuple[Any, ...]:
        return tuple(self._delegates)

    def unresolved(self, signature: MethodSignature, consulted: int) -> NoMatchingMethod:
        return NoMatchingMethod(signature, consulted)

    def __len__(self) -> int:
        return len(self._delegates)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.delegates)

    def __repr__(self) -> str:
        names = ", ".join(type(delegate).__qualname__ for delegate in self._delegates)
        return f"Mixin({names})"


def mixin(*delegates: Any, exclude_universal: bool = False) -> Mixin:
    """Create a :class:`Mixin` that takes on the behaviour of ``delegates``.

    Example:
        >>> len(mixin(Duck(), None, Goose()))
        2
    """
    return Mixin(*delegates, exclude_universal=exclude_universal)
