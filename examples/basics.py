from rxlite import Subject, arrays, create, of, zip

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Querying a list and an Observable the same way")
print("-" * 100)
print()

numbers = [1, 2, 3, 4, 5, 6]

# Eager: returns a new list right away.
print(arrays.filter(arrays.map(numbers, lambda x: x * 10), lambda x: x > 25))

# Lazy: nothing happens until subscribe, then the values are pushed one by one.
tens = of(*numbers).map(lambda x: x * 10).filter(lambda x: x > 25)
tens.subscribe(print, on_completed=lambda: print("done"))

# The >> and & operators are shorthands for map and filter.
((of(*numbers) & (lambda x: x % 2 == 0)) >> (lambda x: -x)).subscribe(print)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Writing a producer")
print("-" * 100)
print()


# A producer pushes values into the observer it is given and returns its teardown.
def countdown(observer):
    for n in (3, 2, 1):
        observer.on_next(n)
    observer.on_completed()
    return lambda: print("countdown released")


create(countdown).subscribe(print)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Combining live sources")
print("-" * 100)
print()

names = Subject()
ages = Subject()

# zip pairs values by index, waiting for both sides.
subscription = zip(lambda name, age: f"{name} is {age}", names, ages).subscribe(print)

names.on_next("Alice")
names.on_next("Bob")
ages.on_next(30)  # prints "Alice is 30"
ages.on_next(41)  # prints "Bob is 41"

# After dispose nothing is delivered anymore.
subscription.dispose()
names.on_next("Carol")
ages.on_next(25)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Folding a sequence")
print("-" * 100)
print()

of(*numbers).reduce(lambda acc, x: acc + x).subscribe(lambda total: print(f"sum: {total}"))
of().reduce(lambda acc, x: acc + x).subscribe(
    print, on_completed=lambda: print("empty input: completed without a value")
)
