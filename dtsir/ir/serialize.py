"""Plain-data dump format for IR trees.

Each node becomes a dict with a ``"tag"`` key (the ``TypeTag`` value) plus
its fields; enums are stored by value and tuples as lists. The format lets a
parser hand a finished tree to another process, or to ``dtsir`` for
inspection, as YAML.
"""

from __future__ import annotations

from dataclasses import fields
from enum import Enum
from pathlib import Path

import yaml

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
    FsParam,
    FsProperty,
    FsPropertyKind,
    FsStringLiteral,
    FsTuple,
    FsUnion,
    FsVariable,
    Type,
    TypeTag,
)


class IRFormatError(ValueError):
    """A dumped tree that cannot be turned back into IR nodes."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path or '/'}: {message}")


# --- Dump ---


def to_dict(node) -> dict:
    """Convert a node (or an enum case) to plain data."""
    data: dict = {}
    tag = getattr(node, "tag", None)
    if tag is not None:
        data["tag"] = tag.value
    for f in fields(node):
        data[f.name] = _dump_value(getattr(node, f.name))
    return data


def _dump_value(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return [_dump_value(v) for v in value]
    if value is None or isinstance(value, (str, bool)):
        return value
    return to_dict(value)


def dump_yaml(node: Type, path: str | Path) -> Path:
    """Write a tree to a YAML file and return the path."""
    path = Path(path)
    path.write_text(yaml.safe_dump(to_dict(node), sort_keys=False))
    return path


# --- Load ---


def from_dict(data: dict, path: str = "") -> Type:
    """Rebuild a node from the output of ``to_dict``.

    Raises:
        IRFormatError: if a node or list slot has the wrong shape, a tag is
            missing or unknown, or a params/modules/index slot holds the
            wrong kind of node. Scalar field values are taken as given.
    """
    if not isinstance(data, dict):
        raise IRFormatError(path, f"expected a mapping, got {type(data).__name__}")
    raw_tag = data.get("tag")
    if raw_tag is None:
        raise IRFormatError(path, "missing 'tag'")
    try:
        tag = TypeTag(raw_tag)
    except ValueError:
        raise IRFormatError(path, f"unknown tag '{raw_tag}'") from None

    loader = _LOADERS.get(tag)
    if loader is None:
        return _UNITS[tag]
    return loader(data, f"{path}/{tag.value}")


def load_yaml(path: str | Path) -> Type:
    """Load a tree written by ``dump_yaml``."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return from_dict(data)


def _type(data: dict, key: str, path: str) -> Type:
    value = data.get(key)
    if value is None:
        return NONE
    return from_dict(value, f"{path}.{key}")


def _items(data: dict, key: str, path: str) -> list:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise IRFormatError(f"{path}.{key}", f"expected a list, got {type(value).__name__}")
    return value


def _types(
    data: dict, key: str, path: str, expected: TypeTag | None = None
) -> tuple[Type, ...]:
    return tuple(
        _node(item, f"{path}.{key}[{i}]", expected)
        for i, item in enumerate(_items(data, key, path))
    )


def _node(data, path: str, expected: TypeTag | None) -> Type:
    """Load a node for a slot that only holds one kind of node."""
    node = from_dict(data, path)
    if expected is not None and node.tag != expected:
        raise IRFormatError(path, f"expected '{expected.value}', got '{node.tag.value}'")
    return node


def _strings(data: dict, key: str, path: str) -> tuple[str, ...]:
    return tuple(_items(data, key, path))


def _enum(enum_cls, data: dict, key: str, default, path: str):
    raw = data.get(key)
    if raw is None:
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        raise IRFormatError(path, f"invalid {key} '{raw}'") from None


def _load_interface(data: dict, path: str) -> FsInterface:
    return FsInterface(
        name=data.get("name", ""),
        full_name=data.get("full_name", ""),
        members=_types(data, "members", path),
        inherits=_types(data, "inherits", path),
        type_parameters=_types(data, "type_parameters", path),
        is_static=data.get("is_static", False),
        is_class=data.get("is_class", False),
        comments=_strings(data, "comments", path),
    )


def _load_enum(data: dict, path: str) -> FsEnum:
    cases = []
    for i, case in enumerate(_items(data, "cases", path)):
        if not isinstance(case, dict):
            raise IRFormatError(
                f"{path}.cases[{i}]", f"expected a mapping, got {type(case).__name__}"
            )
        cases.append(
            FsEnumCase(
                name=case.get("name", ""),
                type=_enum(
                    FsEnumCaseType, case, "type", FsEnumCaseType.NUMERIC, f"{path}.cases[{i}]"
                ),
                value=case.get("value"),
            )
        )
    return FsEnum(name=data.get("name", ""), cases=tuple(cases))


def _load_param(data: dict, path: str) -> FsParam:
    return FsParam(
        name=data.get("name", ""),
        type=_type(data, "type", path),
        optional=data.get("optional", False),
        param_array=data.get("param_array", False),
    )


def _load_function(data: dict, path: str) -> FsFunction:
    return FsFunction(
        name=data.get("name"),
        kind=_enum(FsFunctionKind, data, "kind", FsFunctionKind.REGULAR, path),
        string_param=data.get("string_param"),
        is_static=data.get("is_static", False),
        type_parameters=_types(data, "type_parameters", path),
        params=_types(data, "params", path, TypeTag.PARAM),
        return_type=_type(data, "return_type", path),
        comments=_strings(data, "comments", path),
    )


def _load_property(data: dict, path: str) -> FsProperty:
    index = data.get("index")
    return FsProperty(
        name=data.get("name", ""),
        type=_type(data, "type", path),
        kind=_enum(FsPropertyKind, data, "kind", FsPropertyKind.REGULAR, path),
        index=_node(index, f"{path}.index", TypeTag.PARAM) if index is not None else None,
        option=data.get("option", False),
        is_readonly=data.get("is_readonly", False),
        comments=_strings(data, "comments", path),
    )


def _load_module(data: dict, path: str) -> FsModule:
    return FsModule(name=data.get("name", ""), types=_types(data, "types", path))


def _load_file(data: dict, path: str) -> FsFile:
    return FsFile(
        name=data.get("name", ""),
        opens=_strings(data, "opens", path),
        modules=_types(data, "modules", path, TypeTag.MODULE),
    )


_LOADERS = {
    TypeTag.INTERFACE: _load_interface,
    TypeTag.ENUM: _load_enum,
    TypeTag.PROPERTY: _load_property,
    TypeTag.PARAM: _load_param,
    TypeTag.ARRAY: lambda d, p: FsArray(type=_type(d, "type", p)),
    TypeTag.MAPPED: lambda d, p: FsMapped(
        name=d.get("name", ""), full_name=d.get("full_name", "")
    ),
    TypeTag.FUNCTION: _load_function,
    TypeTag.UNION: lambda d, p: FsUnion(
        types=_types(d, "types", p), option=d.get("option", False)
    ),
    TypeTag.ALIAS: lambda d, p: FsAlias(
        name=d.get("name", ""),
        type=_type(d, "type", p),
        type_parameters=_types(d, "type_parameters", p),
    ),
    TypeTag.GENERIC: lambda d, p: FsGenericType(
        type=_type(d, "type", p), type_parameters=_types(d, "type_parameters", p)
    ),
    TypeTag.TUPLE: lambda d, p: FsTuple(types=_types(d, "types", p)),
    TypeTag.MODULE: _load_module,
    TypeTag.FILE: _load_file,
    TypeTag.VARIABLE: lambda d, p: FsVariable(
        name=d.get("name", ""),
        type=_type(d, "type", p),
        has_declare=d.get("has_declare", False),
    ),
    TypeTag.STRING_LITERAL: lambda d, p: FsStringLiteral(value=d.get("value", "")),
    TypeTag.IMPORT: lambda d, p: FsImport(
        variable=d.get("variable", ""),
        namespace=_strings(d, "namespace", p),
        type=_type(d, "type", p),
    ),
}

_UNITS = {
    TypeTag.TODO: TODO,
    TypeTag.NONE: NONE,
    TypeTag.THIS: THIS,
}
