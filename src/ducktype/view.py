"""Generated view classes and call-time dispatch.

A view class subclasses the target interface and replaces each of its methods
with a forwarder. The class is built once per interface; each view instance
holds only a reference to its delegate source, which is asked for the objects
to try every time a method is called.
"""

import functools
import inspect
import logging
import types
from typing import Any, Callable, Protocol

from ducktype.domain import MethodSignature
from ducktype.errors import NoMatchingMethod
from ducktype.interface import interface_class, interface_methods
from ducktype.resolver import resolve

__all__ = ["DelegateSource", "VIEW_CLASS_CACHE_SIZE", "make_view", "view_source", "dispatch"]

logger = logging.getLogger(__name__)

_SOURCE_ATTRIBUTE = "_ducktype_source"

VIEW_CLASS_CACHE_SIZE = 256
"""Number of generated view classes kept for reuse, least recently used evicted first."""

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)

_FORWARDER_ASSIGNMENTS = ("__module__", "__name__", "__qualname__", "__doc__", "__annotations__")


class DelegateSource(Protocol):
    """Supplies the objects a view dispatches to."""

    def dispatch_order(self) -> tuple[Any, ...]:
        """Return the objects to try, highest priority first, as of this call."""
        ...

    def unresolved(self, signature: MethodSignature, consulted: int) -> NoMatchingMethod:
        """Build the error raised when none of the consulted objects matched."""
        ...


def dispatch(
    source: DelegateSource,
    signature: MethodSignature,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Any:
    """Invoke ``signature`` on the first object from ``source`` that implements it.

    Args:
        source: Supplies the candidate objects in priority order.
        signature: The interface method being called.
        args: Positional arguments of the call.
        kwargs: Keyword arguments of the call.

    Returns:
        Whatever the resolved method returns.

    Raises:
        NoMatchingMethod: If no candidate implements the method.
    """
    candidates = source.dispatch_order()
    for index, candidate in enumerate(candidates):
        method = resolve(candidate, signature)
        if method is not None:
            logger.debug(
                "%s dispatched to candidate %d (%s)",
                signature,
                index,
                type(candidate).__qualname__,
            )
            return method(*args, **kwargs)

    logger.debug("%s unresolved after consulting %d candidates", signature, len(candidates))
    raise source.unresolved(signature, len(candidates))


def make_view(interface: Any, source: DelegateSource, exclude_universal: bool = False) -> Any:
    """Create a view of ``source`` that conforms to ``interface``.

    Nothing about ``source`` is checked here; every call on the view is resolved
    when it is made.

    Raises:
        TypeError: If the interface is not a class.
    """
    cls = _view_class(interface_class(interface), exclude_universal)
    view = object.__new__(cls)
    object.__setattr__(view, _SOURCE_ATTRIBUTE, source)
    return view


def view_source(view: Any) -> DelegateSource:
    """Return the delegate source behind a view.

    Raises:
        TypeError: If ``view`` is not a view.
    """
    try:
        return object.__getattribute__(view, _SOURCE_ATTRIBUTE)
    except AttributeError:
        raise TypeError(f"{view!r} is not a view") from None


@functools.lru_cache(maxsize=VIEW_CLASS_CACHE_SIZE)
def _view_class(interface: type, exclude_universal: bool) -> type:
    namespace: dict[str, Any] = {
        "__module__": interface.__module__,
        "__doc__": interface.__doc__,
        "__repr__": _view_repr,
        "__str__": object.__str__,
        "__eq__": object.__eq__,
        "__ne__": object.__ne__,
        "__hash__": object.__hash__,
    }
    for name, (klass, func) in interface_methods(interface, exclude_universal).items():
        namespace[name] = _forwarder(MethodSignature.from_function(func, klass.__qualname__), func)

    cls = types.new_class(
        f"{interface.__name__}View",
        (interface,),
        exec_body=lambda ns: ns.update(namespace),
    )
    # Abstract properties are not forwarded, but must not block instantiation.
    cls.__abstractmethods__ = frozenset()
    return cls


def _forwarder(signature: MethodSignature, declared: Callable) -> Callable:
    call_shape = _without_receiver(inspect.signature(declared))

    def forward(self, *args, **kwargs):
        bound = call_shape.bind(*args, **kwargs)
        call_args, call_kwargs = _positional_call(call_shape, bound)
        return dispatch(view_source(self), signature, call_args, call_kwargs)

    return functools.update_wrapper(
        forward, declared, assigned=_FORWARDER_ASSIGNMENTS, updated=()
    )


def _positional_call(
    call_shape: inspect.Signature, bound: inspect.BoundArguments
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Rebuild a bound call so every positional parameter up to the last one given is passed by position.

    Delegates are matched to positional parameters by position, not by name, so
    a positional parameter the caller supplied by keyword must not reach the
    delegate as a keyword. Parameters skipped before it take the interface's
    default.
    """
    positional = [p for p in call_shape.parameters.values() if p.kind in _POSITIONAL]
    supplied = [index for index, p in enumerate(positional) if p.name in bound.arguments]
    args = [
        bound.arguments.get(parameter.name, parameter.default)
        for parameter in positional[: supplied[-1] + 1 if supplied else 0]
    ]

    kwargs: dict[str, Any] = {}
    for parameter in call_shape.parameters.values():
        if parameter.name not in bound.arguments:
            continue
        value = bound.arguments[parameter.name]
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            args.extend(value)
        elif parameter.kind is inspect.Parameter.KEYWORD_ONLY:
            kwargs[parameter.name] = value
        elif parameter.kind is inspect.Parameter.VAR_KEYWORD:
            kwargs.update(value)
    return tuple(args), kwargs


def _without_receiver(sig: inspect.Signature) -> inspect.Signature:
    parameters = list(sig.parameters.values())
    if parameters and parameters[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        parameters = parameters[1:]
    return sig.replace(parameters=parameters)


def _view_repr(view: Any) -> str:
    interface = type(view).__mro__[1]
    return f"<{interface.__qualname__} view of {view_source(view)!r}>"
