"""
Selects and constructs the reactivex subject that backs an observed
attribute, and reads back its current value when the kind retains one.
"""

from __future__ import annotations

from typing import Any, Callable

from reactivex.subject import BehaviorSubject, ReplaySubject, Subject

from .options import Kind, ObservedOptions, ReplayOptions


class _Missing:
    """Marker for 'no initial value was declared'"""

    __slots__ = ()

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING: Any = _Missing()


def behavior_subject(seed, options: ObservedOptions) -> Subject:
    return BehaviorSubject(None if seed is MISSING else seed)


def plain_subject(seed, options: ObservedOptions) -> Subject:
    return Subject()


def replay_subject(seed, options: ObservedOptions) -> Subject:
    replay = options.replay or ReplayOptions()
    return ReplaySubject(replay.buffer_size, replay.window, replay.scheduler)


# Lookup dict for mapping a kind to a method that
# constructs the matching subject
SUBJECT_FACTORIES: dict[Kind, Callable[[Any, ObservedOptions], Subject]] = {
    Kind.BEHAVIOR: behavior_subject,
    Kind.SUBJECT: plain_subject,
    Kind.REPLAY: replay_subject,
}


def create_subject(seed, options: ObservedOptions) -> Subject:
    factory = SUBJECT_FACTORIES.get(options.kind, behavior_subject)
    return factory(seed, options)


def current_value(subject: Subject):
    """
    Returns the retained value of a behavior subject. Other subjects don't
    have a single current value, so None is returned for those.
    """
    if isinstance(subject, BehaviorSubject):
        return subject.value
    return None


def is_closed(subject: Subject) -> bool:
    """Returns whether the subject was disposed or has already terminated"""
    return subject.is_disposed or subject.is_stopped
