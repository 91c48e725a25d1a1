"""
Declaration options for observed attributes: which kind of subject backs
the attribute and how a replay subject buffers its values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional, Union

from reactivex import abc

logger = logging.getLogger(__name__)


class Kind(str, Enum):
    BEHAVIOR = "behavior"
    SUBJECT = "subject"
    REPLAY = "replay"


@dataclass(frozen=True)
class ReplayOptions:
    """
    Constructor arguments for a replay subject.

    buffer_size: maximum number of values to retain
    window: maximum age of retained values (timedelta or seconds)
    scheduler: time source used to age the values
    """

    buffer_size: Optional[int] = None
    window: Union[timedelta, float, None] = None
    scheduler: Optional[abc.SchedulerBase] = None


@dataclass(frozen=True)
class ObservedOptions:
    kind: Kind = Kind.BEHAVIOR
    replay: Optional[ReplayOptions] = None

    def __post_init__(self):
        # accept the string values of Kind and mappings for replay
        object.__setattr__(self, "kind", to_kind(self.kind))
        object.__setattr__(self, "replay", to_replay_options(self.replay))


OptionsLike = Union[Kind, str, ObservedOptions, Mapping, None]


def to_kind(value) -> Kind:
    """
    Returns the Kind for the given selector. Anything that is not
    recognized falls back to Kind.BEHAVIOR.
    """
    if isinstance(value, Kind):
        return value
    try:
        return Kind(value)
    except ValueError:
        if value is not None:
            logger.debug("unknown subject kind %r, using %s", value, Kind.BEHAVIOR)
        return Kind.BEHAVIOR


def to_replay_options(value) -> Optional[ReplayOptions]:
    if value is None or isinstance(value, ReplayOptions):
        return value
    if isinstance(value, Mapping):
        return ReplayOptions(**value)
    raise TypeError(
        f"replay options should be ReplayOptions or a mapping, not {type(value)}"
    )


def resolve_options(kind: OptionsLike = None, replay=None) -> ObservedOptions:
    """
    Normalizes the different ways a declaration can be configured
    into a single ObservedOptions record.

    `kind` may be a Kind, its string value, an ObservedOptions record
    or a mapping with "kind" and "replay" keys. An explicit `replay`
    argument takes precedence over replay options inside `kind`.
    """
    if isinstance(kind, ObservedOptions):
        options = kind
    elif isinstance(kind, Mapping):
        options = ObservedOptions(kind=kind.get("kind"), replay=kind.get("replay"))
    else:
        options = ObservedOptions(kind=kind)

    if replay is not None:
        options = ObservedOptions(kind=options.kind, replay=replay)

    # replay options only mean something for replay subjects
    if options.kind is not Kind.REPLAY and options.replay is not None:
        options = ObservedOptions(kind=options.kind)
    return options
