import gc
import sys
from weakref import ref

from .object_utils import (
    OwnerBindings,
    get_class_bindings,
    get_instance_bindings,
    get_instance_dict,
)


class BindingDb:
    """
    Collection of bindings for owners that can't hold them in their own
    __dict__ (instances of classes that only use __slots__), tracked by the
    id of the owner.

    Owners that support weak references are tracked with a weakref, and
    their entry is removed as soon as the owner is finalized. Other owners
    are held on to by the db, since the id of an object can be reused after
    it is garbage collected. When the db is the last one holding a
    reference to such an owner, its entry is removed after a gc run.
    """

    __slots__ = ("db",)

    def __init__(self):
        self.db = {}
        gc.callbacks.append(self.cleanup)

    def cleanup(self, phase, info):
        """
        Callback for garbage collector to cleanup the db for owners
        that have no other references outside of the db
        """
        if phase != "stop":
            return

        keys_to_delete = []
        for key, value in self.db.items():
            if value["owner"] is None:
                continue
            # Refs:
            # - sys.getrefcount
            # - ref in db item
            if sys.getrefcount(value["owner"]) <= 2:
                # We are the last to hold a reference!
                keys_to_delete.append(key)

        for key in keys_to_delete:
            del self.db[key]

    def clear(self):
        self.db.clear()

    def _new_entry(self, owner):
        obj_id = id(owner)
        try:
            weak_owner = ref(owner, lambda _: self.db.pop(obj_id, None))
        except TypeError:
            # __slots__ without __weakref__
            return {"owner": owner, "ref": None, "bindings": OwnerBindings(obj_id)}
        return {"owner": None, "ref": weak_owner, "bindings": OwnerBindings(obj_id)}

    def _entry(self, owner, create=False):
        obj_id = id(owner)
        entry = self.db.get(obj_id)
        if entry is not None:
            tracked = entry["ref"]() if entry["ref"] is not None else entry["owner"]
            if tracked is owner:
                return entry
        if not create:
            return None
        entry = self.db[obj_id] = self._new_entry(owner)
        return entry

    def bindings(self, owner, create=False):
        """
        Returns the dict of bindings (keyed on attribute name) for the
        given owner. Returns None when there are no bindings yet, unless
        `create` is True.
        """
        if isinstance(owner, type):
            return get_class_bindings(owner, create=create)

        instance_dict = get_instance_dict(owner)
        if instance_dict is not None:
            return get_instance_bindings(owner, instance_dict, create=create)

        entry = self._entry(owner, create=create)
        return entry["bindings"] if entry is not None else None

    def get(self, owner, name):
        bindings = self.bindings(owner)
        if bindings is None:
            return None
        return bindings.get(name)

    def seed(self, owner, name, default):
        """
        Returns the value that the owner was copied with for the given
        attribute, or `default` when it wasn't copied from another owner
        """
        bindings = self.bindings(owner)
        if bindings is None:
            return default
        return bindings.seeds.get(name, default)

    def install(self, owner, name, binding):
        """
        Records the binding for the owner, unless a binding was recorded
        already. Returns the binding that ended up being recorded.
        """
        bindings = self.bindings(owner, create=True)
        bindings.seeds.pop(name, None)
        return bindings.setdefault(name, binding)


# Create a global binding collection
binding_db = BindingDb()
