"""
Example that shows how observed attributes can be combined
with reactivex operators
"""

from reactivex import operators as ops

from observed import ObservedMeta, ReplayOptions, observed


class Thermostat(metaclass=ObservedMeta):
    # shared by every thermostat
    unit = observed("C", static=True)

    temperature = observed(20.0)
    target = observed(21.0)
    # keep the last five alarms around for late subscribers
    alarm = observed(kind="replay", replay=ReplayOptions(buffer_size=5))

    def __init__(self, room):
        self.room = room
        self.temperature_.pipe(
            ops.filter(lambda value: value > 30.0),
        ).subscribe(lambda value: setattr(self, "alarm", f"{room}: {value}"))


if __name__ == "__main__":
    kitchen = Thermostat("kitchen")
    bedroom = Thermostat("bedroom")

    _ = kitchen.temperature_.pipe(
        ops.distinct_until_changed(),
    ).subscribe(
        lambda value: print(f"kitchen is {value} {Thermostat.unit}")  # noqa: T201
    )

    # assigning the attribute publishes the value
    kitchen.temperature = 22.5
    kitchen.temperature = 22.5
    assert kitchen.temperature == 22.5
    # other instances have their own stream
    assert bedroom.temperature == 20.0

    kitchen.temperature = 31.0
    bedroom.temperature = 35.0

    alarms = []
    kitchen.alarm_.subscribe(alarms.append)
    assert alarms == ["kitchen: 31.0"]
    # replay subjects don't keep a current value
    assert kitchen.alarm is None

    Thermostat.unit = "F"
    assert kitchen.unit == "F"
