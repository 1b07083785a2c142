"""IR data models — the normalized type-system tree of a declaration file.

The parser builds these nodes bottom-up and the emitter walks them read-only.
Every case of the ``Type`` union is a frozen dataclass carrying a class-level
``tag``; sequences are stored as tuples so a finished tree never changes.

The aggregate views (static members, constructors, string-literal params,
module partitions, enum case type) are computed properties. They are derived
from the stored lists on every access and never cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class TypeTag(Enum):
    INTERFACE = "interface"
    ENUM = "enum"
    PROPERTY = "property"
    PARAM = "param"
    ARRAY = "array"
    TODO = "todo"  # Unsupported construct
    NONE = "none"  # Deliberately untyped
    MAPPED = "mapped"
    FUNCTION = "function"
    UNION = "union"
    ALIAS = "alias"
    GENERIC = "generic"
    TUPLE = "tuple"
    MODULE = "module"
    FILE = "file"
    VARIABLE = "variable"
    STRING_LITERAL = "string_literal"
    IMPORT = "import"
    THIS = "this"


class FsEnumCaseType(Enum):
    NUMERIC = "numeric"
    STRING = "string"
    UNKNOWN = "unknown"


class FsFunctionKind(Enum):
    REGULAR = "regular"
    CONSTRUCTOR = "constructor"
    CALL = "call"  # Call signature
    STRING_PARAM = "string_param"  # Overload dispatched on a string literal


class FsPropertyKind(Enum):
    REGULAR = "regular"
    INDEX = "index"


# --- Unit cases ---


@dataclass(frozen=True)
class FsTodo:
    """A foreign construct with no representation yet."""

    tag: ClassVar[TypeTag] = TypeTag.TODO


@dataclass(frozen=True)
class FsNone:
    """No type was given. Not the same thing as TODO."""

    tag: ClassVar[TypeTag] = TypeTag.NONE


@dataclass(frozen=True)
class FsThis:
    tag: ClassVar[TypeTag] = TypeTag.THIS


TODO = FsTodo()
NONE = FsNone()
THIS = FsThis()


# --- Leaf references ---


@dataclass(frozen=True)
class FsMapped:
    """A by-name reference to another declaration.

    Resolved by the emitter through its own lookup; the tree holds no
    pointer to the target.
    """

    name: str
    full_name: str

    tag: ClassVar[TypeTag] = TypeTag.MAPPED


@dataclass(frozen=True)
class FsStringLiteral:
    value: str

    tag: ClassVar[TypeTag] = TypeTag.STRING_LITERAL


def simple_type(name: str) -> FsMapped:
    """Reference a type whose short and qualified names are the same."""
    return FsMapped(name=name, full_name=name)


# --- Wrappers ---


@dataclass(frozen=True)
class FsArray:
    type: Type

    tag: ClassVar[TypeTag] = TypeTag.ARRAY


@dataclass(frozen=True)
class FsGenericType:
    """Application of a base type to type arguments. Arity is not checked."""

    type: Type
    type_parameters: tuple[Type, ...] = ()

    tag: ClassVar[TypeTag] = TypeTag.GENERIC


@dataclass(frozen=True)
class FsUnion:
    types: tuple[Type, ...] = ()
    option: bool = False  # Includes undefined/null

    tag: ClassVar[TypeTag] = TypeTag.UNION


@dataclass(frozen=True)
class FsTuple:
    types: tuple[Type, ...] = ()

    tag: ClassVar[TypeTag] = TypeTag.TUPLE


# --- Declarations ---


@dataclass(frozen=True)
class FsParam:
    """A function or index-signature parameter."""

    name: str
    type: Type = NONE
    optional: bool = False
    param_array: bool = False  # Variadic (...rest)

    tag: ClassVar[TypeTag] = TypeTag.PARAM


@dataclass(frozen=True)
class FsFunction:
    """A callable. ``name`` is None for signatures and set for declarations."""

    name: str | None = None
    kind: FsFunctionKind = FsFunctionKind.REGULAR
    string_param: str | None = None  # Literal value when kind is STRING_PARAM
    is_static: bool = False
    type_parameters: tuple[Type, ...] = ()
    params: tuple[FsParam, ...] = ()
    return_type: Type = NONE
    comments: tuple[str, ...] = ()

    tag: ClassVar[TypeTag] = TypeTag.FUNCTION

    @property
    def has_string_literal_params(self) -> bool:
        return any(_is_string_literal_param(p) for p in self.params)

    @property
    def string_literal_params(self) -> list[FsParam]:
        return [p for p in self.params if _is_string_literal_param(p)]

    @property
    def non_string_literal_params(self) -> list[FsParam]:
        return [p for p in self.params if not _is_string_literal_param(p)]


@dataclass(frozen=True)
class FsProperty:
    """A field, or an index signature when ``kind`` is INDEX."""

    name: str
    type: Type = NONE
    kind: FsPropertyKind = FsPropertyKind.REGULAR
    index: FsParam | None = None
    option: bool = False
    is_readonly: bool = False
    comments: tuple[str, ...] = ()

    tag: ClassVar[TypeTag] = TypeTag.PROPERTY


@dataclass(frozen=True)
class FsInterface:
    """A named structural contract: an interface, or a class when ``is_class``.

    ``is_static`` marks an interface holding only static functions.
    """

    name: str
    full_name: str
    members: tuple[Type, ...] = ()
    inherits: tuple[Type, ...] = ()
    type_parameters: tuple[Type, ...] = ()
    is_static: bool = False
    is_class: bool = False
    comments: tuple[str, ...] = ()

    tag: ClassVar[TypeTag] = TypeTag.INTERFACE

    @property
    def has_static_members(self) -> bool:
        return any(_is_static(m) for m in self.members)

    @property
    def static_members(self) -> list[Type]:
        return [m for m in self.members if _is_static(m)]

    @property
    def non_static_members(self) -> list[Type]:
        return [m for m in self.members if not _is_static(m)]

    @property
    def has_constructor(self) -> bool:
        return any(_is_constructor(m) for m in self.members)

    @property
    def constructors(self) -> list[Type]:
        return [m for m in self.members if _is_constructor(m)]


@dataclass(frozen=True)
class FsEnumCase:
    name: str
    type: FsEnumCaseType = FsEnumCaseType.NUMERIC
    value: str | None = None


@dataclass(frozen=True)
class FsEnum:
    name: str
    cases: tuple[FsEnumCase, ...] = ()

    tag: ClassVar[TypeTag] = TypeTag.ENUM

    @property
    def type(self) -> FsEnumCaseType:
        """Case type for the enum as a whole.

        Unknown beats String beats Numeric; an enum with no cases is Numeric.
        """
        if any(c.type == FsEnumCaseType.UNKNOWN for c in self.cases):
            return FsEnumCaseType.UNKNOWN
        if any(c.type == FsEnumCaseType.STRING for c in self.cases):
            return FsEnumCaseType.STRING
        return FsEnumCaseType.NUMERIC


@dataclass(frozen=True)
class FsAlias:
    name: str
    type: Type = NONE
    type_parameters: tuple[Type, ...] = ()

    tag: ClassVar[TypeTag] = TypeTag.ALIAS


@dataclass(frozen=True)
class FsVariable:
    name: str
    type: Type = NONE
    has_declare: bool = False

    tag: ClassVar[TypeTag] = TypeTag.VARIABLE


@dataclass(frozen=True)
class FsImport:
    """``import variable = namespace.path`` bound to a type."""

    variable: str
    namespace: tuple[str, ...] = ()
    type: Type = NONE

    tag: ClassVar[TypeTag] = TypeTag.IMPORT


# --- Containers ---


@dataclass(frozen=True)
class FsModule:
    """A namespace. Child order is declaration order and is kept."""

    name: str
    types: tuple[Type, ...] = ()

    tag: ClassVar[TypeTag] = TypeTag.MODULE

    @property
    def modules(self) -> list[FsModule]:
        return [t for t in self.types if t.tag == TypeTag.MODULE]

    @property
    def non_modules(self) -> list[Type]:
        return [t for t in self.types if t.tag != TypeTag.MODULE]


@dataclass(frozen=True)
class FsFile:
    """Root of a parsed declaration file."""

    name: str
    opens: tuple[str, ...] = ()
    modules: tuple[FsModule, ...] = ()

    tag: ClassVar[TypeTag] = TypeTag.FILE


Type = Union[
    FsInterface,
    FsEnum,
    FsProperty,
    FsParam,
    FsArray,
    FsTodo,
    FsNone,
    FsMapped,
    FsFunction,
    FsUnion,
    FsAlias,
    FsGenericType,
    FsTuple,
    FsModule,
    FsFile,
    FsVariable,
    FsStringLiteral,
    FsImport,
    FsThis,
]


def _is_static(tp: Type) -> bool:
    from dtsir.ir.queries import is_static

    return is_static(tp)


def _is_constructor(tp: Type) -> bool:
    from dtsir.ir.queries import is_constructor

    return is_constructor(tp)


def _is_string_literal_param(param: FsParam) -> bool:
    from dtsir.ir.queries import is_string_literal_param

    return is_string_literal_param(param)
