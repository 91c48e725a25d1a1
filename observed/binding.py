"""
Bindings connect one observed attribute of one owner to the subject that
backs it. They are created lazily, on the first write or on the first read
of the attribute or its stream.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from reactivex import Observable, operators
from reactivex.subject import Subject

from .binding_db import binding_db
from .options import Kind, ObservedOptions
from .streams import create_subject, current_value, is_closed

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StreamClosedError(RuntimeError):
    """
    Raised when a value is assigned to an observed attribute whose
    subject was already completed, errored or disposed.
    """

    pass


class Binding(Generic[T]):
    __slots__ = ("__weakref__", "kind", "name", "observable", "subject")

    def __init__(self, name: str, subject: Subject, kind: Kind) -> None:
        self.name = name
        self.kind = kind
        self.subject = subject
        self.observable: Observable[T] = subject.pipe(operators.as_observable())

    @property
    def value(self) -> T | None:
        return current_value(self.subject)

    def push(self, value: T) -> None:
        if is_closed(self.subject):
            raise StreamClosedError(
                f"Can't assign to '{self.name}': its stream is closed"
            )
        self.subject.on_next(value)

    def __repr__(self):
        return f"<Binding {self.name!r} kind={self.kind.value}>"


def materialize(owner: Any, name: str, seed: Any, options: ObservedOptions) -> Binding:
    """
    Returns the binding of the attribute `name` for the given owner,
    creating it when the owner doesn't have one yet. When two calls race,
    the binding that was installed first is returned by both.
    """
    existing = binding_db.get(owner, name)
    if existing is not None:
        return existing

    subject = create_subject(seed, options)
    binding = binding_db.install(owner, name, Binding(name, subject, options.kind))
    if binding.subject is subject:
        owner_cls = owner if isinstance(owner, type) else type(owner)
        logger.debug(
            "materialized %s subject for %s.%s",
            options.kind.value,
            owner_cls.__qualname__,
            name,
        )
    return binding
