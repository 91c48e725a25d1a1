from observed import observed


def noop(_):
    pass


class Thing:
    value = observed(0)


# @profile
def main():
    for _ in range(1000):
        obj = Thing()
        obj.value_.subscribe(noop)
        obj.value = 1
        obj.value = 2
        _ = obj.value


if __name__ == "__main__":
    main()
