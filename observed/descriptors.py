"""
Descriptors that turn a class attribute into an observed attribute.

Declaring an observed attribute installs two descriptors on the class: one
for the value and one for the stream of that value. Both are shared by
every instance, so the descriptors themselves don't hold any state. On
first use, the owner (an instance, or the class itself for static
attributes) gets its own binding to a fresh subject, which then serves
every following read and write for that owner.
"""

from __future__ import annotations

import warnings
from typing import Any, Generic, Optional, TypeVar

from reactivex import Observable

from .binding import Binding, materialize
from .binding_db import binding_db
from .options import OptionsLike, resolve_options
from .streams import MISSING

T = TypeVar("T")

# The stream of attribute `foo` is available as `foo_`
STREAM_SUFFIX = "_"


def lookup_class_attr(cls, name, default=None):
    """Returns the raw class attribute, without invoking descriptors"""
    for klass in cls.__mro__:
        if name in vars(klass):
            return vars(klass)[name]
    return default


class ObservedMeta(type):
    """
    Metaclass for classes with static observed attributes. Assigning to a
    class attribute bypasses descriptors defined on the class itself, so
    class level writes are routed through the descriptor here.
    """

    def __setattr__(cls, name, value):
        if isinstance(value, ObservedProperty):
            # declaring a new observed attribute after class creation
            super().__setattr__(name, value)
            value.__set_name__(cls, name)
            return

        attr = lookup_class_attr(cls, name)
        if isinstance(attr, ObservedProperty) and attr.static:
            attr.write(cls, value)
            return
        if isinstance(attr, StreamProperty) and attr.prop.static:
            raise AttributeError(f"can't set stream attribute '{name}'")
        super().__setattr__(name, value)

    def __delattr__(cls, name):
        attr = lookup_class_attr(cls, name)
        if isinstance(attr, ObservedProperty) and attr.static:
            raise AttributeError(f"can't delete observed attribute '{name}'")
        if isinstance(attr, StreamProperty) and attr.prop.static:
            raise AttributeError(f"can't delete stream attribute '{name}'")
        super().__delattr__(name)


class ObservedProperty(Generic[T]):
    """
    Data descriptor for the value of an observed attribute.

    Reading returns the current value (only retained by the 'behavior'
    kind, None otherwise) and writing pushes the value into the stream.
    """

    def __init__(
        self,
        initial: Any = MISSING,
        kind: OptionsLike = None,
        *,
        replay=None,
        static: bool = False,
    ) -> None:
        self.name: Optional[str] = None
        self.initial = initial
        self.options = resolve_options(kind, replay)
        self.static = static

    @property
    def stream_name(self) -> str:
        return f"{self.name}{STREAM_SUFFIX}"

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if self.static and not isinstance(owner, ObservedMeta):
            warnings.warn(
                f"Static observed attribute '{owner.__qualname__}.{name}' is "
                "declared on a class without ObservedMeta: assigning to it on "
                "the class will replace the attribute instead of updating it",
                stacklevel=2,
            )
        type.__setattr__(owner, self.stream_name, StreamProperty(self))

    def owner_of(self, instance, owner):
        """
        Returns the object that owns the binding: the instance, or the
        class for static attributes. Returns None for a non-static
        attribute that is accessed on the class.
        """
        if self.static:
            return owner if instance is None else type(instance)
        return instance

    def binding(self, target) -> Binding[T]:
        binding = binding_db.get(target, self.name)
        if binding is None:
            seed = binding_db.seed(target, self.name, self.initial)
            binding = materialize(target, self.name, seed, self.options)
        return binding

    def write(self, target, value: T) -> None:
        binding = binding_db.get(target, self.name)
        if binding is None:
            # the first value written seeds the stream
            binding = materialize(target, self.name, value, self.options)
        binding.push(value)

    def __get__(self, instance, owner=None):
        target = self.owner_of(instance, owner)
        if target is None:
            return self
        return self.binding(target).value

    def __set__(self, instance, value: T) -> None:
        self.write(self.owner_of(instance, type(instance)), value)

    def __delete__(self, instance):
        raise AttributeError(f"can't delete observed attribute '{self.name}'")

    def __repr__(self):
        return (
            f"<{type(self).__name__} {self.name!r} "
            f"kind={self.options.kind.value} static={self.static}>"
        )


class StreamProperty(Generic[T]):
    """
    Read-only data descriptor for the stream of an observed attribute.
    """

    def __init__(self, prop: ObservedProperty[T]) -> None:
        self.prop = prop

    def __get__(self, instance, owner=None) -> Observable[T]:
        target = self.prop.owner_of(instance, owner)
        if target is None:
            return self
        return self.prop.binding(target).observable

    def __set__(self, instance, value):
        raise AttributeError(f"can't set stream attribute '{self.prop.stream_name}'")

    def __delete__(self, instance):
        raise AttributeError(
            f"can't delete stream attribute '{self.prop.stream_name}'"
        )


def observed(
    initial: Any = MISSING,
    kind: OptionsLike = None,
    *,
    replay=None,
    static: bool = False,
) -> Any:
    """
    Declares an observed attribute in a class body:

        class Thermometer:
            temperature = observed(20.0)

    `thermometer.temperature = 21.5` pushes the value into the stream that
    is available as `thermometer.temperature_`.

    kind: "behavior" (default), "subject" or "replay", or an ObservedOptions
    replay: ReplayOptions (or a mapping) for the "replay" kind
    static: bind the attribute to the class instead of to each instance
    """
    return ObservedProperty(initial, kind, replay=replay, static=static)


def observe(*names: str, kind: OptionsLike = None, replay=None, static=False):
    """
    Class decorator that turns existing class attributes into observed
    attributes. The value that the attribute had on the class becomes its
    initial value. Works on top of dataclasses:

        @observe("x", "y")
        @dataclass
        class Point:
            x: float = 0.0
            y: float = 0.0
    """

    def decorator(cls):
        for name in names:
            initial = lookup_class_attr(cls, name, MISSING)
            if isinstance(initial, ObservedProperty):
                initial = initial.initial
            prop = ObservedProperty(initial, kind, replay=replay, static=static)
            type.__setattr__(cls, name, prop)
            prop.__set_name__(cls, name)
        return cls

    return decorator


def get_binding(owner, name: str) -> Optional[Binding]:
    """
    Returns the binding of an observed attribute for the given owner
    (the class for static attributes), or None if it doesn't exist yet.
    """
    return binding_db.get(owner, name)


def observed_attributes(cls) -> dict[str, ObservedProperty]:
    """
    Collects the observed attributes declared on the given class
    and its supertypes
    """
    result = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, ObservedProperty):
                result[name] = attr
            else:
                result.pop(name, None)
    return result
