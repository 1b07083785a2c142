"""Classification and narrowing over ``Type`` nodes.

Every function here is total: any tag is a valid input, and a tag that does
not match yields ``False``, ``None`` or ``""`` rather than an error. Emitters
branch on node kind through these helpers instead of inspecting tags
themselves.
"""

from __future__ import annotations

from dtsir.ir.models import (
    FsFunction,
    FsFunctionKind,
    FsGenericType,
    FsInterface,
    FsModule,
    FsParam,
    Type,
    TypeTag,
)


# --- Predicates ---


def is_function(tp: Type) -> bool:
    return tp.tag == TypeTag.FUNCTION


def is_string_literal(tp: Type) -> bool:
    return tp.tag == TypeTag.STRING_LITERAL


def is_module(tp: Type) -> bool:
    return tp.tag == TypeTag.MODULE


def is_string_literal_param(param: FsParam) -> bool:
    return is_string_literal(param.type)


# --- Narrowing ---


def as_function(tp: Type) -> FsFunction | None:
    return tp if tp.tag == TypeTag.FUNCTION else None


def as_interface(tp: Type) -> FsInterface | None:
    return tp if tp.tag == TypeTag.INTERFACE else None


def as_generic(tp: Type) -> FsGenericType | None:
    return tp if tp.tag == TypeTag.GENERIC else None


def as_string_literal(tp: Type) -> str | None:
    """The literal text of a string-literal type, or None."""
    if tp.tag == TypeTag.STRING_LITERAL:
        return tp.value
    return None


def as_module(tp: Type) -> FsModule | None:
    return tp if tp.tag == TypeTag.MODULE else None


# --- Member classification ---


def is_static(tp: Type) -> bool:
    """True for a static function or a static-only interface.

    Any other tag, including tags added later, is non-static.
    """
    if tp.tag == TypeTag.FUNCTION:
        return tp.is_static
    if tp.tag == TypeTag.INTERFACE:
        return tp.is_static
    return False


def is_constructor(tp: Type) -> bool:
    if tp.tag == TypeTag.FUNCTION:
        return tp.kind == FsFunctionKind.CONSTRUCTOR
    return False


# --- Names ---

_NAMED_TAGS = frozenset(
    {
        TypeTag.INTERFACE,
        TypeTag.ENUM,
        TypeTag.PARAM,
        TypeTag.PROPERTY,
        TypeTag.ALIAS,
        TypeTag.VARIABLE,
        TypeTag.MODULE,
        TypeTag.FILE,
    }
)


def get_name(tp: Type) -> str:
    """Declared name of a node, looking through generic applications.

    Returns "" for unnamed functions and for tags that carry no name
    (arrays, unions, tuples, literals, mapped references, imports, this,
    TODO, none).
    """
    while tp.tag == TypeTag.GENERIC:
        tp = tp.type
    if tp.tag == TypeTag.FUNCTION:
        return tp.name or ""
    if tp.tag in _NAMED_TAGS:
        return tp.name
    return ""


def get_full_name(tp: Type) -> str:
    """Fully-qualified name of an interface or mapped reference.

    Looks through generic applications. Enums, functions, aliases and every
    other declaration give "": qualified resolution only applies to nominal
    interfaces and name references.
    """
    while tp.tag == TypeTag.GENERIC:
        tp = tp.type
    if tp.tag in (TypeTag.INTERFACE, TypeTag.MAPPED):
        return tp.full_name
    return ""
