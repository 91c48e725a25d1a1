import gc

from observed import binding_db, get_binding, observed


class Slotted:
    __slots__ = ()

    value = observed(1)


class WeakSlotted:
    __slots__ = ("__weakref__",)

    value = observed(1)


def test_slotted_owners_isolated(received):
    a = Slotted()
    b = Slotted()
    assert a.value == 1

    a.value = 2
    assert a.value == 2
    assert b.value == 1
    assert received(a.value_) == [2]
    assert len(binding_db.db) == 2


def test_slotted_owner_cleanup():
    a = Slotted()
    a.value = 2
    assert len(binding_db.db) == 1

    del a
    gc.collect()
    assert len(binding_db.db) == 0


def test_weakref_owner_cleanup():
    a = WeakSlotted()
    a.value = 2
    assert get_binding(a, "value").value == 2
    assert binding_db.db[id(a)]["owner"] is None

    del a
    # finalizing the owner removes the entry right away
    assert len(binding_db.db) == 0


def test_instance_bindings_not_in_db():
    class Plain:
        value = observed(1)

    plain = Plain()
    plain.value = 2
    assert len(binding_db.db) == 0
    assert set(vars(plain)["__observed__"]) == {"value"}


def test_bindings_without_create():
    a = Slotted()
    assert binding_db.bindings(a) is None
    assert get_binding(a, "value") is None
    assert len(binding_db.db) == 0
