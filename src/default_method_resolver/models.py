"""Core data models for default method resolution."""

from dataclasses import dataclass, field
from enum import Enum, auto


class TypeKind(Enum):
    """Whether a type is a class or an interface."""

    CLASS = auto()
    INTERFACE = auto()


class Visibility(Enum):
    """Access level of a declared method."""

    PUBLIC = auto()
    PRIVATE = auto()
    PACKAGE = auto()  # anything that is neither public nor private


class QualificationState(Enum):
    """Whether a recorded method is still a candidate for resolution."""

    QUALIFIED = auto()
    DISQUALIFIED = auto()  # shadowed by a more-derived method on the same path


class ConflictKind(Enum):
    """Linkage failure reported when no unique target exists."""

    ABSTRACT_METHOD_ERROR = "AbstractMethodError"
    INCOMPATIBLE_CLASS_CHANGE_ERROR = "IncompatibleClassChangeError"


@dataclass(frozen=True)
class MethodInfo:
    """A method declared on a type.

    Identity is (declaring type, name, erased signature). The remaining
    attributes describe the declaration and take no part in equality.
    """

    declaring_type: str
    name: str
    signature: str  # erased, e.g. "(int,str)bool"
    visibility: Visibility = field(default=Visibility.PUBLIC, compare=False)
    is_static: bool = field(default=False, compare=False)
    has_body: bool = field(default=False, compare=False)

    @property
    def is_private(self) -> bool:
        """Check if the method is private."""
        return self.visibility == Visibility.PRIVATE

    def __str__(self) -> str:
        return f"{self.declaring_type}.{self.name}{self.signature}"


@dataclass(frozen=True)
class TypeInfo:
    """A class or interface and its direct supertypes."""

    name: str
    kind: TypeKind
    superclass_name: str | None
    interface_names: tuple[str, ...]  # declared order
    methods: tuple[MethodInfo, ...]

    @property
    def is_interface(self) -> bool:
        """Check if the type is an interface."""
        return self.kind == TypeKind.INTERFACE


@dataclass(frozen=True)
class Target:
    """Resolution selected a unique method."""

    method: MethodInfo


@dataclass(frozen=True)
class Conflict:
    """Resolution found methods but no unique target."""

    kind: ConflictKind
    detail: str
    candidates: tuple[MethodInfo, ...] = ()  # every qualified method, recorded order


@dataclass(frozen=True)
class NoMatchFound:
    """No method with the requested name and signature exists in the hierarchy."""


type Outcome = Target | Conflict | NoMatchFound


@dataclass(frozen=True)
class MethodResolution:
    """Outcome of resolving one (name, signature) pair against a root type."""

    name: str
    signature: str
    outcome: Outcome


@dataclass(frozen=True)
class AnalysisResult:
    """All resolutions computed for a root type."""

    root: str
    resolutions: tuple[MethodResolution, ...]

    @property
    def conflicts(self) -> tuple[MethodResolution, ...]:
        """Resolutions that ended in a Conflict."""
        return tuple(r for r in self.resolutions if isinstance(r.outcome, Conflict))


def make_erased_signature(parameter_types: tuple[str, ...], return_type: str) -> str:
    """Build an erased signature string like "(int,str)bool".

    Args:
        parameter_types: Erased parameter type names, in declaration order
        return_type: Erased return type name

    Returns:
        The signature used to group methods into families
    """
    return f"({','.join(parameter_types)}){return_type}"
