from observed import observed


class Counter:
    count = observed(0)


counter = Counter()


def my_callback(value):
    print(f"count is {value}!")


counter.count_.subscribe(my_callback)

counter.count = 6
assert counter.count == 6

other = Counter()
assert other.count == 0

other.count = 7
assert counter.count == 6
