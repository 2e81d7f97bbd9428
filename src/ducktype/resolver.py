"""Structural method resolution.

:func:`resolve` answers one question: does this object have a method with the
given name that accepts every call the interface's method accepts? It inspects
the object's own methods, not any interface it declares, and never raises for a
mismatch: absence is an ordinary outcome, reported as ``None``.

Matching rules:
    - Positional parameters are matched by position. Each interface parameter
      needs a positional slot on the candidate, or a ``*args`` to absorb it.
    - Keyword-only parameters are matched by name, or absorbed by ``**kwargs``.
    - Any further parameter of the candidate must be optional.
    - ``*args``/``**kwargs`` on the interface require the same on the candidate.
    - Where both sides annotate a parameter, the interface's type must be a
      subtype of the candidate's. Unannotated parameters, ``Any``, type
      variables and annotations that cannot be evaluated match anything.
      ``float`` accepts ``int`` and ``complex`` accepts both, as in typing.
"""

import inspect
import logging
import types
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Union, get_args, get_origin

from ducktype.domain import MethodSignature, ParameterSpec, parameter_specs

__all__ = ["resolve", "parameters_compatible", "accepts_type"]

logger = logging.getLogger(__name__)

_NUMERIC_PROMOTIONS = {float: (int,), complex: (int, float)}


def resolve(candidate: Any, signature: MethodSignature) -> Optional[Callable]:
    """Find the method of ``candidate`` matching ``signature``.

    Args:
        candidate: The object to inspect.
        signature: The interface method being called.

    Returns:
        The method bound to ``candidate``, or None if it has no matching method.
    """
    method = _lookup_method(candidate, signature.name)
    if method is None:
        logger.debug("%s has no method %r", _describe(candidate), signature.name)
        return None

    try:
        offered = parameter_specs(method)
    except (ValueError, TypeError):
        # Some builtins expose no signature; their name is all there is to go on.
        logger.debug("Matching %s on %s by name only", signature, _describe(candidate))
        return method

    if not parameters_compatible(signature.parameters, offered):
        logger.debug(
            "%s.%s(%s) does not match %s",
            _describe(candidate),
            signature.name,
            ", ".join(str(p) for p in offered),
            signature,
        )
        return None

    return method


def _lookup_method(candidate: Any, name: str) -> Optional[Callable]:
    try:
        static = inspect.getattr_static(candidate, name)
    except AttributeError:
        if not hasattr(type(candidate), "__getattr__"):
            return None
    else:
        # Properties and slots are fields, not behaviour.
        if inspect.isdatadescriptor(static):
            return None

    member = getattr(candidate, name, None)
    return member if callable(member) else None


@dataclass(frozen=True)
class _ParameterGroups:
    positional: list[ParameterSpec]
    keyword_only: list[ParameterSpec]
    var_positional: Optional[ParameterSpec]
    var_keyword: Optional[ParameterSpec]

    @staticmethod
    def of(parameters: tuple[ParameterSpec, ...]) -> "_ParameterGroups":
        positional = [p for p in parameters if p.positional]
        keyword_only = [p for p in parameters if p.kind is inspect.Parameter.KEYWORD_ONLY]
        var_positional = next(
            (p for p in parameters if p.kind is inspect.Parameter.VAR_POSITIONAL), None
        )
        var_keyword = next(
            (p for p in parameters if p.kind is inspect.Parameter.VAR_KEYWORD), None
        )
        return _ParameterGroups(positional, keyword_only, var_positional, var_keyword)


def parameters_compatible(
    requested: tuple[ParameterSpec, ...], offered: tuple[ParameterSpec, ...]
) -> bool:
    """Check that a method with ``offered`` parameters accepts calls made against ``requested``.

    Args:
        requested: Parameters of the interface method, receiver excluded.
        offered: Parameters of the candidate's bound method.

    Returns:
        True if every call valid for the interface method is valid for the candidate.
    """
    req = _ParameterGroups.of(requested)
    off = _ParameterGroups.of(offered)

    if req.var_positional and not off.var_positional:
        return False
    if req.var_keyword and not off.var_keyword:
        return False
    if req.var_positional and not accepts_type(
        off.var_positional.declared_type, req.var_positional.declared_type
    ):
        return False
    if req.var_keyword and not accepts_type(
        off.var_keyword.declared_type, req.var_keyword.declared_type
    ):
        return False

    for index, parameter in enumerate(req.positional):
        if index < len(off.positional):
            slot = off.positional[index]
        elif off.var_positional:
            slot = off.var_positional
        else:
            return False
        if not _slot_accepts(slot, parameter):
            return False

    requested_keywords = {p.name: p for p in req.keyword_only}
    for parameter in off.positional[len(req.positional):]:
        if parameter.name not in requested_keywords and not parameter.has_default:
            return False

    filled_positionally = {p.name for p in off.positional[: len(req.positional)]}
    offered_keywords = {p.name: p for p in off.positional + off.keyword_only if p.keyword}
    for name, parameter in requested_keywords.items():
        if name in filled_positionally:
            return False
        slot = offered_keywords.get(name, off.var_keyword)
        if slot is None or not _slot_accepts(slot, parameter):
            return False

    return all(p.has_default or p.name in requested_keywords for p in off.keyword_only)


def _slot_accepts(slot: ParameterSpec, parameter: ParameterSpec) -> bool:
    # An argument the interface lets callers omit must be optional on the candidate too.
    if parameter.has_default and slot.required:
        return False
    return accepts_type(slot.declared_type, parameter.declared_type)


def accepts_type(offered: Optional[Any], requested: Optional[Any]) -> bool:
    """Check whether a parameter declared as ``offered`` accepts a ``requested`` argument.

    Example:
        >>> accepts_type(Food, Bread)     # True, Bread subclasses Food
        >>> accepts_type(Bread, Food)     # False
        >>> accepts_type(Optional[int], int)  # True
    """
    if _is_unknown(offered) or _is_unknown(requested) or offered == requested:
        return True

    requested_members = _union_members(requested)
    if requested_members is not None:
        return all(accepts_type(offered, member) for member in requested_members)

    offered_members = _union_members(offered)
    if offered_members is not None:
        return any(accepts_type(member, requested) for member in offered_members)

    offered_class = get_origin(offered) or offered
    requested_class = get_origin(requested) or requested
    if not (inspect.isclass(offered_class) and inspect.isclass(requested_class)):
        return False

    if issubclass(requested_class, _NUMERIC_PROMOTIONS.get(offered_class, ())):
        return True

    try:
        return issubclass(requested_class, offered_class)
    except TypeError:
        # Non-runtime protocols cannot be checked; treat them like an unannotated parameter.
        return True


def _is_unknown(declared_type: Optional[Any]) -> bool:
    return (
        declared_type is None
        or declared_type is Any
        or isinstance(declared_type, (str, TypeVar))
    )


def _union_members(declared_type: Any) -> Optional[tuple[Any, ...]]:
    if get_origin(declared_type) in (Union, types.UnionType):
        return get_args(declared_type)
    return None


def _describe(candidate: Any) -> str:
    return f"<{type(candidate).__qualname__} object>"
