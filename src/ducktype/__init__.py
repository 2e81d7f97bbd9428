"""Ducktype: structural adaptation of objects to interfaces at runtime.

Ducktype lets a caller treat any object, or an ordered collection of objects, as
an instance of an interface it never declared. Nothing is checked up front:
each call on a view is matched by method name and signature when it is made,
and fails loudly if nothing implements it.

Key Features:
    - Adapt one object to any class, ABC or Protocol
    - Aggregate several delegates with deterministic first-match dispatch
    - Signature-aware matching that honours argument subtyping
    - Lazy resolution: views see delegates registered after they were created

Basic Usage:
    >>> from ducktype.adapter import adapt
    >>> from ducktype.mixin import mixin
    >>>
    >>> duck = adapt(Goose(), Duck)
    >>> duck.quack()
    'honk'
    >>>
    >>> turducken = mixin(Duck(), Goose())
    >>> turducken.adapt(Goose).quack()
    'quack'

The package consists of several modules:
    - adapter: Single-object views
    - mixin: Multi-delegate aggregation
    - resolver: Name and signature matching against a candidate object
    - interface: Introspection of target interfaces
    - view: Generated view classes and call-time dispatch
    - domain: Core domain models (ParameterSpec, MethodSignature)
    - errors: Framework-specific exceptions
"""
