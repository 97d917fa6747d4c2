"""A slice of a collections library, used to resolve spliterator() on AbstractSet.

Run:
    default-method-resolver demo_files/collections_hierarchy.py AbstractSet --method spliterator
"""


@interface
class Iterable:
    def iterator(self) -> Iterator: ...

    def for_each(self, action: Consumer) -> None:
        for item in self:
            action.accept(item)

    def spliterator(self) -> Spliterator:
        return Spliterator.unknown_size(self.iterator())


@interface
class Collection(Iterable):
    def size(self) -> int: ...

    def contains(self, item: object) -> bool: ...

    def spliterator(self) -> Spliterator:
        return Spliterator.sized(self)

    def stream(self) -> Stream:
        return Stream.of(self.spliterator())


@interface
class Set(Collection):
    def spliterator(self) -> Spliterator:
        return Spliterator.distinct(self)


@interface
class Consumer:
    def accept(self, item: object) -> None: ...


@interface
class Iterator:
    def has_next(self) -> bool: ...

    def next(self) -> object: ...


@interface
class Spliterator:
    def try_advance(self, action: Consumer) -> bool: ...


@interface
class Stream:
    def count(self) -> int: ...


class AbstractCollection(Collection):
    def contains(self, item: object) -> bool:
        return any(x == item for x in self)

    def to_string(self) -> str:
        return "[" + ", ".join(str(x) for x in self) + "]"


class AbstractSet(AbstractCollection, Set):
    def equals(self, other: object) -> bool:
        return isinstance(other, Set) and other.size() == self.size()
