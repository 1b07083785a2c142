"""Tests for tree traversal, coverage gaps and the advisory lint."""

from dtsir.ir.lint import Severity, lint
from dtsir.ir.models import (
    NONE,
    TODO,
    FsAlias,
    FsArray,
    FsEnum,
    FsEnumCase,
    FsFile,
    FsFunction,
    FsGenericType,
    FsInterface,
    FsMapped,
    FsModule,
    FsParam,
    FsProperty,
    FsUnion,
    TypeTag,
    simple_type,
)
from dtsir.ir.walk import children, count_tags, find_gaps, walk


def _tree() -> FsFile:
    widget = FsInterface(
        name="Widget",
        full_name="ui.Widget",
        type_parameters=(simple_type("T"),),
        members=(
            FsProperty(name="size", type=TODO),
            FsFunction(
                name="render",
                params=(FsParam(name="ctx", type=simple_type("Context")),),
                return_type=FsUnion(types=(simple_type("string"), TODO)),
            ),
        ),
    )
    return FsFile(name="ui.d.ts", modules=(FsModule(name="ui", types=(widget,)),))


# --- Walk Tests ---


def test_children_order():
    fn = FsFunction(
        name="f",
        type_parameters=(simple_type("T"),),
        params=(FsParam(name="a"), FsParam(name="b")),
        return_type=simple_type("void"),
    )
    assert [c.tag for c in children(fn)] == [
        TypeTag.MAPPED,
        TypeTag.PARAM,
        TypeTag.PARAM,
        TypeTag.MAPPED,
    ]


def test_mapped_is_a_leaf():
    assert children(FsMapped(name="Widget", full_name="ui.Widget")) == []
    assert children(TODO) == []
    assert children(FsEnum(name="E", cases=(FsEnumCase(name="A"),))) == []


def test_walk_paths():
    paths = [path for path, _ in walk(_tree())]
    assert paths[0] == "ui.d.ts"
    assert "ui.d.ts/ui/Widget" in paths
    assert "ui.d.ts/ui/Widget/render/ctx" in paths


def test_find_gaps_in_tree_order():
    gaps = find_gaps(_tree())
    assert [g.path for g in gaps] == [
        "ui.d.ts/ui/Widget/size/todo[0]",
        "ui.d.ts/ui/Widget/render/union[1]/todo[1]",
    ]
    assert gaps[0].parent == TypeTag.PROPERTY
    assert gaps[1].parent == TypeTag.UNION


def test_none_is_not_a_gap():
    assert find_gaps(FsModule(name="m", types=(FsParam(name="x", type=NONE),))) == []


def test_walk_handles_deep_trees():
    node = simple_type("number")
    for _ in range(3000):
        node = FsArray(type=node)
    counts = count_tags(node)
    assert counts[TypeTag.ARRAY] == 3000
    assert counts[TypeTag.MAPPED] == 1
    assert find_gaps(node) == []


def test_count_tags():
    counts = count_tags(_tree())
    assert counts[TypeTag.TODO] == 2
    assert counts[TypeTag.INTERFACE] == 1
    assert counts[TypeTag.FILE] == 1


# --- Lint Tests ---


def test_lint_reports_todos_as_info():
    result = lint(_tree())
    assert result.clean
    assert len(result.infos) == 2
    assert all(i.code == "UNSUPPORTED" for i in result.infos)


def test_lint_empty_names_and_cases():
    root = FsModule(name="", types=(FsInterface(name="", full_name=""), FsEnum(name="Empty")))
    result = lint(root)
    codes = [i.code for i in result.warnings]
    assert codes == ["EMPTY_NAME", "ENUM_NO_CASES"]
    assert not result.clean


def test_lint_generic_arity():
    root = FsModule(
        name="m",
        types=(
            FsInterface(name="Box", full_name="m.Box", type_parameters=(simple_type("T"),)),
            FsAlias(
                name="Pair",
                type=FsGenericType(
                    type=FsMapped(name="Box", full_name="m.Box"),
                    type_parameters=(simple_type("string"), simple_type("number")),
                ),
            ),
            FsAlias(
                name="Single",
                type=FsGenericType(
                    type=FsMapped(name="Box", full_name="m.Box"),
                    type_parameters=(simple_type("string"),),
                ),
            ),
        ),
    )
    result = lint(root)
    assert [i.code for i in result.warnings] == ["GENERIC_ARITY"]
    assert result.warnings[0].severity == Severity.WARNING
    assert "m.Box" in result.warnings[0].message


def test_lint_ignores_unknown_generic_bases():
    root = FsAlias(
        name="P",
        type=FsGenericType(type=simple_type("Promise"), type_parameters=(simple_type("T"),)),
    )
    assert lint(root).issues == []


def test_lint_ignore_patterns():
    result = lint(_tree(), ignore=["*/size/*"])
    assert [i.path for i in result.infos] == ["ui.d.ts/ui/Widget/render/union[1]/todo[1]"]


def test_lint_summary():
    assert lint(_tree()).summary() == "[CLEAN] 0 warning(s), 2 note(s)"
