from copy import deepcopy

# Name of the attribute under which an owner keeps its bindings
BINDINGS_ATTR = "__observed__"


class OwnerBindings(dict):
    """
    Bindings of a single owner, keyed on attribute name.

    Copying an instance copies its __dict__, and with it this dict. The id
    of the owner is kept so that a copy can tell the bindings are not its
    own. A copy starts out with the values of the original as `seeds`
    instead of sharing its subjects.
    """

    __slots__ = ("owner_id", "seeds")

    def __init__(self, owner_id=None, seeds=None):
        super().__init__()
        self.owner_id = owner_id
        self.seeds = {} if seeds is None else seeds

    def current_values(self):
        values = dict(self.seeds)
        for name, binding in self.items():
            values[name] = binding.value
        return values

    def __deepcopy__(self, memo):
        return OwnerBindings(seeds=deepcopy(self.current_values(), memo))

    def __reduce__(self):
        # subjects can't be pickled, only the values they hold
        return (OwnerBindings, (None, self.current_values()))


def get_instance_dict(obj):
    """
    Returns the __dict__ of the given instance, or None when the instance
    is of a class that only uses __slots__
    """
    try:
        return vars(obj)
    except TypeError:
        return None


def get_instance_bindings(obj, instance_dict, create=False):
    """
    Returns the bindings dict that lives in the instance's __dict__.
    Bindings that were copied along from another instance are replaced.
    """
    bindings = instance_dict.get(BINDINGS_ATTR)
    if bindings is not None and bindings.owner_id != id(obj):
        bindings = OwnerBindings(id(obj), bindings.current_values())
        instance_dict[BINDINGS_ATTR] = bindings
    if bindings is None and create:
        bindings = instance_dict.setdefault(BINDINGS_ATTR, OwnerBindings(id(obj)))
    return bindings


def get_class_bindings(cls, create=False):
    """
    Returns the bindings dict that lives in the class' own __dict__.
    Bindings of a parent class are never returned for a subclass.
    """
    bindings = vars(cls).get(BINDINGS_ATTR)
    if bindings is None and create:
        bindings = OwnerBindings(id(cls))
        # bypass ObservedMeta.__setattr__
        type.__setattr__(cls, BINDINGS_ATTR, bindings)
    return bindings
