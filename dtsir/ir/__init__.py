"""Intermediate Representation (IR) of TypeScript-style declaration files.

The IR sits between the declaration parser and the binding emitter:
- Models: one frozen node class per kind of type-system construct
- Queries: total predicates, narrowing and name projections over nodes
- Aggregate views: static/instance members, constructors, string-literal
  overload parameters, module partitions, enum case type
"""

from dtsir.ir.models import (
    NONE,
    THIS,
    TODO,
    FsAlias,
    FsArray,
    FsEnum,
    FsEnumCase,
    FsEnumCaseType,
    FsFile,
    FsFunction,
    FsFunctionKind,
    FsGenericType,
    FsImport,
    FsInterface,
    FsMapped,
    FsModule,
    FsNone,
    FsParam,
    FsProperty,
    FsPropertyKind,
    FsStringLiteral,
    FsThis,
    FsTodo,
    FsTuple,
    FsUnion,
    FsVariable,
    Type,
    TypeTag,
    simple_type,
)
from dtsir.ir.queries import (
    as_function,
    as_generic,
    as_interface,
    as_module,
    as_string_literal,
    get_full_name,
    get_name,
    is_constructor,
    is_function,
    is_module,
    is_static,
    is_string_literal,
    is_string_literal_param,
)

__all__ = [
    "NONE",
    "THIS",
    "TODO",
    "FsAlias",
    "FsArray",
    "FsEnum",
    "FsEnumCase",
    "FsEnumCaseType",
    "FsFile",
    "FsFunction",
    "FsFunctionKind",
    "FsGenericType",
    "FsImport",
    "FsInterface",
    "FsMapped",
    "FsModule",
    "FsNone",
    "FsParam",
    "FsProperty",
    "FsPropertyKind",
    "FsStringLiteral",
    "FsThis",
    "FsTodo",
    "FsTuple",
    "FsUnion",
    "FsVariable",
    "Type",
    "TypeTag",
    "simple_type",
    "as_function",
    "as_generic",
    "as_interface",
    "as_module",
    "as_string_literal",
    "get_full_name",
    "get_name",
    "is_constructor",
    "is_function",
    "is_module",
    "is_static",
    "is_string_literal",
    "is_string_literal_param",
]
