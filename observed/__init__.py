from importlib.metadata import version

__version__ = version("observed")


from .binding import Binding, StreamClosedError, materialize
from .binding_db import binding_db
from .descriptors import (
    STREAM_SUFFIX,
    ObservedMeta,
    ObservedProperty,
    StreamProperty,
    get_binding,
    observe,
    observed,
    observed_attributes,
)
from .options import Kind, ObservedOptions, ReplayOptions
from .streams import MISSING
