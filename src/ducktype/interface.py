"""Introspection of target interfaces.

A target interface is any class: an :class:`abc.ABC`, a :class:`typing.Protocol`
or a plain class. Its instance methods, abstract or concrete, make up the
behaviour a view forwards. Fields, properties, static methods and class methods
are not part of it.
"""

import abc
import inspect
from typing import Any, Callable, Generic, Protocol, get_origin

from ducktype.domain import MethodSignature

__all__ = [
    "UNIVERSAL_METHODS",
    "interface_class",
    "interface_methods",
    "interface_signatures",
]


UNIVERSAL_METHODS = frozenset({"__eq__", "__ne__", "__hash__", "__repr__", "__str__"})
"""Methods every object has, which callers may choose not to forward."""

_OBJECT_MACHINERY = frozenset(
    {
        "__init__",
        "__new__",
        "__del__",
        "__getattr__",
        "__getattribute__",
        "__setattr__",
        "__delattr__",
        "__dir__",
        "__init_subclass__",
        "__class_getitem__",
        "__subclasshook__",
        "__reduce__",
        "__reduce_ex__",
        "__getstate__",
        "__setstate__",
        "__sizeof__",
        "__format__",
    }
)

_FRAMEWORK_BASES = (object, Protocol, Generic, abc.ABC)


def interface_class(interface: Any) -> type:
    """Return the class behind an interface descriptor.

    Parameterised generics such as ``Repository[User]`` are reduced to their origin.

    Raises:
        TypeError: If the descriptor is not a class.
    """
    origin = get_origin(interface)
    if inspect.isclass(origin):
        interface = origin
    if not inspect.isclass(interface):
        raise TypeError(f"{interface!r} is not a class and cannot be used as an interface")
    return interface


def interface_methods(
    interface: Any, exclude_universal: bool = False
) -> dict[str, tuple[type, Callable]]:
    """Collect the methods a view of ``interface`` forwards.

    The interface's MRO is walked from the most derived class upwards, so an
    override replaces the method it overrides. A name rebound to something
    other than a function (a property, say) hides the methods of that name
    further up.

    Args:
        interface: The target interface.
        exclude_universal: Whether ``__eq__``, ``__hash__``, ``__repr__`` and the
            like are left out even when the interface declares them.

    Returns:
        ``(declaring class, function)`` pairs keyed by method name, derived
        classes first and each class in declaration order.

    Raises:
        TypeError: If the interface is not a class.
    """
    cls = interface_class(interface)
    excluded = _OBJECT_MACHINERY | UNIVERSAL_METHODS if exclude_universal else _OBJECT_MACHINERY

    methods: dict[str, tuple[type, Callable]] = {}
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass in _FRAMEWORK_BASES:
            continue
        for name, member in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if name in excluded or not inspect.isfunction(member):
                continue
            methods[name] = (klass, member)

    return methods


def interface_signatures(
    interface: Any, exclude_universal: bool = False
) -> dict[str, MethodSignature]:
    """Describe the methods a view of ``interface`` forwards.

    Example:
        >>> class Duck(Protocol):
        ...     def quack(self) -> str: ...
        ...     def swim(self, distance: int) -> None: ...
        >>> list(interface_signatures(Duck))
        ['quack', 'swim']
        >>> str(interface_signatures(Duck)["swim"])
        'Duck.swim(self, distance: int)'
    """
    return {
        name: MethodSignature.from_function(func, klass.__qualname__)
        for name, (klass, func) in interface_methods(interface, exclude_universal).items()
    }
