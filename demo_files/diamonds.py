"""Diamond shapes in an interface graph.

Run:
    default-method-resolver demo_files/diamonds.py Ambiguous --strict
    default-method-resolver demo_files/diamonds.py ClassWins
    default-method-resolver demo_files/diamonds.py Merged --print-hierarchy
"""


@interface
class Left:
    def describe(self) -> str:
        return "left"


@interface
class Right:
    def describe(self) -> str:
        return "right"


@interface
class Joined(Left, Right):
    def describe(self) -> str:
        return "joined"


@interface
class Sized:
    def size(self) -> int: ...


class Base:
    def describe(self) -> str:
        return "base"


class Ambiguous(Left, Right):
    pass


class ClassWins(Base, Left, Right):
    pass


class Merged(Joined):
    pass


class Unimplemented(Sized):
    pass
