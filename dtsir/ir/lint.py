"""Advisory lint for IR trees.

The model accepts whatever the parser produced; this module only reports
shapes that usually point at a parser gap:
- Declarations with an empty name (the global module is unnamed by convention)
- Enums without cases
- Generic applications whose argument count differs from a declaration of
  the same name in the tree
- TODO nodes (unsupported constructs)

Nothing here raises or alters the tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from fnmatch import fnmatch

from dtsir.ir.models import Type, TypeTag
from dtsir.ir.queries import get_full_name
from dtsir.ir.walk import walk


class Severity(Enum):
    WARNING = "warning"  # Likely a parser bug
    INFO = "info"  # Coverage note


@dataclass
class LintIssue:
    severity: Severity
    code: str  # Machine-readable issue code
    message: str
    path: str = ""


@dataclass
class LintResult:
    issues: list[LintIssue] = field(default_factory=list)

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def infos(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    @property
    def clean(self) -> bool:
        return not self.warnings

    def summary(self) -> str:
        status = "CLEAN" if self.clean else "WARN"
        return f"[{status}] {len(self.warnings)} warning(s), {len(self.infos)} note(s)"


_NAMED_DECLARATIONS = frozenset(
    {
        TypeTag.INTERFACE,
        TypeTag.ENUM,
        TypeTag.ALIAS,
        TypeTag.VARIABLE,
        TypeTag.FILE,
    }
)


def lint(root: Type, ignore: list[str] | None = None) -> LintResult:
    """Lint a tree. Issues whose path matches an ``ignore`` pattern are dropped."""
    nodes = list(walk(root))
    result = LintResult()

    _check_names(nodes, result)
    _check_enum_cases(nodes, result)
    _check_generic_arity(nodes, result)
    _check_unsupported(nodes, result)

    if ignore:
        result.issues = [
            i for i in result.issues if not any(fnmatch(i.path, pat) for pat in ignore)
        ]
    return result


def _check_names(nodes: list[tuple[str, Type]], result: LintResult):
    for path, node in nodes:
        if node.tag in _NAMED_DECLARATIONS and not node.name:
            result.issues.append(
                LintIssue(
                    severity=Severity.WARNING,
                    code="EMPTY_NAME",
                    message=f"{node.tag.value} declaration has an empty name",
                    path=path,
                )
            )


def _check_enum_cases(nodes: list[tuple[str, Type]], result: LintResult):
    for path, node in nodes:
        if node.tag == TypeTag.ENUM and not node.cases:
            result.issues.append(
                LintIssue(
                    severity=Severity.WARNING,
                    code="ENUM_NO_CASES",
                    message=f"Enum '{node.name}' has no cases; it will be treated as numeric",
                    path=path,
                )
            )


def _check_generic_arity(nodes: list[tuple[str, Type]], result: LintResult):
    """Compare generic applications with same-named interface/alias declarations."""
    declared: dict[str, int] = {}
    for _, node in nodes:
        if node.tag == TypeTag.INTERFACE:
            declared[node.full_name] = len(node.type_parameters)
        elif node.tag == TypeTag.ALIAS:
            declared.setdefault(node.name, len(node.type_parameters))

    for path, node in nodes:
        if node.tag != TypeTag.GENERIC:
            continue
        name = get_full_name(node)
        expected = declared.get(name)
        if expected is None or expected == len(node.type_parameters):
            continue
        result.issues.append(
            LintIssue(
                severity=Severity.WARNING,
                code="GENERIC_ARITY",
                message=(
                    f"'{name}' is declared with {expected} type parameter(s) "
                    f"but applied to {len(node.type_parameters)}"
                ),
                path=path,
            )
        )


def _check_unsupported(nodes: list[tuple[str, Type]], result: LintResult):
    for path, node in nodes:
        if node.tag == TypeTag.TODO:
            result.issues.append(
                LintIssue(
                    severity=Severity.INFO,
                    code="UNSUPPORTED",
                    message="Construct not supported by the parser",
                    path=path,
                )
            )
