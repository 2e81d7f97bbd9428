from abc import ABC, abstractmethod
from typing import Protocol

import pytest

from birds import Bread, Duck, Goose, Sourdough
from ducktype.adapter import adapt
from ducktype.errors import NoMatchingMethod


class Swimmer(ABC):
    @abstractmethod
    def swim(self) -> str: ...

    @property
    @abstractmethod
    def depth(self) -> int: ...


class BreadEater(Protocol):
    def eat_bread(self, bread: Bread) -> str: ...


class Comparable:
    def __eq__(self, other: object) -> bool: ...

    def __hash__(self) -> int: ...

    def __repr__(self) -> str: ...


class Impostor:
    def __eq__(self, other):
        return True

    def __hash__(self):
        return 7

    def __repr__(self):
        return "Impostor()"


@pytest.fixture
def goose() -> Goose:
    return Goose()


def test_calls_pass_through_to_adapted_object(goose):
    duck = adapt(goose, Duck)

    assert duck.quack() == goose.quack() == "honk"
    assert duck.swim() == "glides"


def test_view_is_instance_of_interface(goose):
    assert isinstance(adapt(goose, Duck), Duck)
    assert isinstance(adapt(goose, Swimmer), Swimmer)


def test_missing_method_raises_naming_signature(goose):
    duck = adapt(goose, Duck)

    with pytest.raises(
        NoMatchingMethod,
        match=r"Duck\.waddle\(self\) is not implemented by the adapted object",
    ) as error:
        duck.waddle()

    assert error.value.signature.name == "waddle"
    assert error.value.delegates is None


def test_arguments_are_forwarded(goose):
    eater = adapt(goose, BreadEater)

    assert eater.eat_bread(Sourdough()) == "eats the sourdough"
    assert eater.eat_bread(bread=Bread()) == "eats the bread"


def test_keyword_arguments_reach_differently_named_parameters():
    class Swan:
        def eat_bread(self, crumbs: Bread) -> str:
            return f"pecks at the {type(crumbs).__name__.lower()}"

    assert adapt(Swan(), BreadEater).eat_bread(bread=Bread()) == "pecks at the bread"


def test_call_not_matching_interface_signature_raises_type_error(goose):
    with pytest.raises(TypeError):
        adapt(goose, BreadEater).eat_bread()


def test_incompatible_signature_is_not_a_match():
    class Pigeon:
        def eat_bread(self, bread: Bread, seeds: int) -> str:
            return "pecks"

    with pytest.raises(NoMatchingMethod, match=r"BreadEater\.eat_bread\(self, bread: Bread\)"):
        adapt(Pigeon(), BreadEater).eat_bread(Bread())


def test_exceptions_raised_by_adapted_method_propagate_unchanged():
    failure = ValueError("too much bread")

    class Overfed:
        def eat_bread(self, bread: Bread) -> str:
            raise failure

    with pytest.raises(ValueError) as error:
        adapt(Overfed(), BreadEater).eat_bread(Bread())

    assert error.value is failure


def test_methods_are_resolved_at_call_time(goose):
    duck = adapt(goose, Duck)

    with pytest.raises(NoMatchingMethod):
        duck.waddle()

    goose.waddle = lambda: "waddles, reluctantly"

    assert duck.waddle() == "waddles, reluctantly"


def test_methods_not_declared_by_interface_are_not_exposed(goose):
    duck = adapt(goose, Duck)

    with pytest.raises(AttributeError):
        duck.eat_bread(Bread())


def test_properties_are_not_forwarded():
    class Diver:
        depth = 30

        def swim(self) -> str:
            return "dives"

    swimmer = adapt(Diver(), Swimmer)

    assert swimmer.swim() == "dives"
    assert swimmer.depth != 30


def test_interface_without_methods_is_accepted(goose):
    class Marker:
        pass

    assert isinstance(adapt(goose, Marker), Marker)


def test_views_are_independent(goose):
    first = adapt(goose, Duck)
    second = adapt(goose, Duck)

    assert first is not second
    assert first != second
    assert type(first) is type(second)


def test_universal_methods_use_view_identity_when_excluded():
    view = adapt(Impostor(), Comparable, exclude_universal=True)

    assert view != adapt(Impostor(), Comparable, exclude_universal=True)
    assert view == view
    assert hash(view) != 7
    assert repr(view) == "<Comparable view of Impostor()>"


def test_universal_methods_declared_by_interface_are_forwarded():
    view = adapt(Impostor(), Comparable)

    assert view == object()
    assert hash(view) == 7
    assert repr(view) == "Impostor()"


def test_universal_methods_not_declared_by_interface_are_never_forwarded():
    view = adapt(Impostor(), Duck)

    assert view != object()
    assert repr(view) == "<Duck view of Impostor()>"


def test_view_of_view(goose):
    duck = adapt(goose, Duck)

    assert adapt(duck, Swimmer).swim() == "glides"


def test_none_cannot_be_adapted():
    with pytest.raises(TypeError, match="Cannot adapt None"):
        adapt(None, Duck)


def test_interface_must_be_a_class(goose):
    with pytest.raises(TypeError, match="cannot be used as an interface"):
        adapt(goose, "Duck")


def test_keyword_argument_after_skipped_default_reaches_right_parameter():
    class Tuner(Protocol):
        def tune(self, pitch: int = 440, volume: int = 5) -> tuple: ...

    class Radio:
        def tune(self, frequency: int = 440, level: int = 5) -> tuple:
            return frequency, level

    tuner = adapt(Radio(), Tuner)

    assert tuner.tune(volume=9) == (440, 9)
    assert tuner.tune(pitch=100) == (100, 5)
    assert tuner.tune() == (440, 5)


def test_interface_default_fills_skipped_positional_parameter():
    class Tuner(Protocol):
        def tune(self, pitch: int = 440, volume: int = 5) -> tuple: ...

    class Radio:
        def tune(self, frequency: int = 98, level: int = 1) -> tuple:
            return frequency, level

    assert adapt(Radio(), Tuner).tune(volume=9) == (440, 9)


def test_keyword_only_and_extra_keywords_stay_keywords():
    class Mixer(Protocol):
        def mix(self, first: int, *rest: int, scale: int = 1, **options: int) -> tuple: ...

    class Blender:
        def mix(self, *values: int, scale: int = 1, **options: int) -> tuple:
            return values, scale, options

    mixer = adapt(Blender(), Mixer)

    assert mixer.mix(1, 2, 3, scale=2, speed=4) == ((1, 2, 3), 2, {"speed": 4})
    assert mixer.mix(first=1) == ((1,), 1, {})


def test_generated_view_classes_are_cached_with_a_bound():
    from ducktype.view import VIEW_CLASS_CACHE_SIZE, _view_class

    assert type(adapt(Goose(), Duck)) is type(adapt(Duck(), Duck))
    assert _view_class.cache_info().maxsize == VIEW_CLASS_CACHE_SIZE
    assert VIEW_CLASS_CACHE_SIZE is not None
