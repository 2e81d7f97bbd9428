"""Domain models describing the methods a target interface declares."""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, get_type_hints

__all__ = ["ParameterKind", "ParameterSpec", "MethodSignature"]

logger = logging.getLogger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_KEYWORD = (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)

ParameterKind = type(inspect.Parameter.POSITIONAL_ONLY)


@dataclass(frozen=True)
class ParameterSpec:
    """A single parameter of a method, as seen by a caller.

    Attributes:
        name: The parameter name.
        kind: The :class:`inspect.Parameter` kind (positional-only, keyword-only, ...).
        declared_type: The annotated type, or None if the parameter is unannotated.
        has_default: Whether callers may omit the parameter.
    """

    name: str
    kind: ParameterKind
    declared_type: Optional[Any]
    has_default: bool

    @property
    def positional(self) -> bool:
        return self.kind in _POSITIONAL

    @property
    def keyword(self) -> bool:
        return self.kind in _KEYWORD

    @property
    def required(self) -> bool:
        return not self.has_default and self.kind in _POSITIONAL + _KEYWORD

    def __str__(self) -> str:
        if self.kind is inspect.Parameter.VAR_POSITIONAL:
            text = f"*{self.name}"
        elif self.kind is inspect.Parameter.VAR_KEYWORD:
            text = f"**{self.name}"
        else:
            text = self.name
        if self.declared_type is not None:
            text += f": {_type_name(self.declared_type)}"
        if self.has_default:
            text += "=..."
        return text


@dataclass(frozen=True)
class MethodSignature:
    """Identifies a method by name and ordered parameter list.

    Two signatures are equal when their names and full parameter sequences are
    equal. The owner is carried for error messages only.

    Attributes:
        name: The method name.
        parameters: The parameters after the bound receiver, in declaration order.
        owner: Qualified name of the class that declared the method, if known.

    Example:
        >>> class Duck:
        ...     def eat(self, food: Bread) -> None: ...
        >>> str(MethodSignature.from_function(Duck.eat, "Duck"))
        'Duck.eat(self, food: Bread)'
    """

    name: str
    parameters: tuple[ParameterSpec, ...]
    owner: Optional[str] = field(default=None, compare=False)

    @property
    def parameter_types(self) -> tuple[Optional[Any], ...]:
        return tuple(parameter.declared_type for parameter in self.parameters)

    def __str__(self) -> str:
        qualified = f"{self.owner}.{self.name}" if self.owner else self.name
        rendered = ", ".join(["self"] + [str(p) for p in self.parameters])
        return f"{qualified}({rendered})"

    @staticmethod
    def from_function(func: Callable, owner: Optional[str] = None) -> "MethodSignature":
        """Build the signature of a function declared in a class body.

        The first positional parameter is taken to be the receiver and dropped.

        Args:
            func: The unbound function.
            owner: Qualified name of the declaring class. Derived from the
                function's own qualified name if not given.

        Returns:
            The signature callers of the bound method see.
        """
        parameters = parameter_specs(func)
        if parameters and parameters[0].positional:
            parameters = parameters[1:]
        if owner is None:
            owner = func.__qualname__.rpartition(".")[0]
        # Classes defined inside functions are named from the innermost scope.
        owner = owner.rpartition("<locals>.")[2] or None
        return MethodSignature(func.__name__, parameters, owner)


def parameter_specs(func: Callable) -> tuple[ParameterSpec, ...]:
    """Describe the parameters of a callable, resolving annotations where possible.

    Raises:
        ValueError: If no signature can be provided for the callable.
        TypeError: If the object is not supported by :func:`inspect.signature`.
    """
    sig = inspect.signature(func)
    hints = _type_hints(func)
    return tuple(
        ParameterSpec(
            name,
            parameter.kind,
            hints.get(name, None if parameter.annotation is inspect.Parameter.empty else parameter.annotation),
            parameter.default is not inspect.Parameter.empty,
        )
        for name, parameter in sig.parameters.items()
    )


def _type_hints(func: Callable) -> dict[str, Any]:
    try:
        return get_type_hints(func)
    except (NameError, TypeError, AttributeError) as e:
        # Unresolvable forward references leave the raw annotations in place.
        logger.debug("Could not evaluate type hints of %r: %s", func, e)
        return {}


def _type_name(declared_type: Any) -> str:
    if isinstance(declared_type, type):
        return declared_type.__qualname__
    return str(declared_type).replace("typing.", "")
