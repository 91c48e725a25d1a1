import gc

import pytest

from observed import binding_db


@pytest.fixture(autouse=True)
def clear_binding_db():
    # Bindings of slotted owners from previous tests may still be around
    # when a test failed, so the db is cleared explicitly after collecting.
    gc.collect()
    binding_db.clear()


@pytest.fixture
def received():
    """
    Returns a factory for lists that collect the values emitted
    by a subscription
    """

    def subscribe(observable):
        values = []
        observable.subscribe(values.append)
        return values

    return subscribe
