"""dtsir CLI — inspect IR trees dumped by a declaration-file parser."""

import sys

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dtsir import __version__
from dtsir.config import load_config
from dtsir.ir.models import FsFile, FsModule, TypeTag
from dtsir.ir.queries import as_function, as_interface

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a .dtsir.yaml file",
)
@click.pass_context
def main(ctx: click.Context, config_path: str | None):
    """dtsir — type model of TypeScript-style declaration files.

    Commands read a YAML dump whose root is a file node.
    """
    try:
        ctx.obj = load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"  [red]Invalid config:[/] {escape(str(e))}")
        sys.exit(1)


def _load_file(path: str) -> FsFile:
    from dtsir.ir.serialize import IRFormatError, load_yaml

    try:
        root = load_yaml(path)
    except (OSError, yaml.YAMLError, IRFormatError) as e:
        console.print(f"  [red]Failed to load:[/] {escape(str(e))}")
        sys.exit(1)

    if root.tag != TypeTag.FILE:
        console.print(f"  [red]Expected a file node at the root, got '{root.tag.value}'[/]")
        sys.exit(1)
    return root


def _dispatches_on_literal(tp) -> bool:
    fn = as_function(tp)
    return fn is not None and fn.has_string_literal_params


def _iter_modules(modules, prefix: str = ""):
    for module in modules:
        path = f"{prefix}.{module.name}" if prefix else module.name
        yield path, module
        yield from _iter_modules(module.modules, path)


# ── Summary ──────────────────────────────────────────────────────────


@main.command()
@click.argument("ir_file")
def summary(ir_file: str):
    """Show modules, interfaces and enums of a dumped file."""
    root = _load_file(ir_file)
    console.print(f"\n[bold blue]dtsir[/] — {escape(root.name)}\n")
    if root.opens:
        console.print(f"  Opens: {escape(', '.join(root.opens))}")

    modules: list[tuple[str, FsModule]] = list(_iter_modules(root.modules))
    table = Table(title=f"Modules ({len(modules)})")
    table.add_column("Module", style="cyan")
    table.add_column("Declarations", justify="right")
    table.add_column("Submodules", justify="right")
    for path, module in modules:
        table.add_row(
            escape(path) or "(global)",
            str(len(module.non_modules)),
            str(len(module.modules)),
        )
    console.print(table)

    interfaces = Table(title="Interfaces")
    interfaces.add_column("Name", style="cyan")
    interfaces.add_column("Static", justify="right")
    interfaces.add_column("Ctors", justify="right")
    interfaces.add_column("Overloads", justify="right")
    enums = Table(title="Enums")
    enums.add_column("Name", style="cyan")
    enums.add_column("Cases", justify="right")
    enums.add_column("Type")

    for _, module in modules:
        for tp in module.non_modules:
            it = as_interface(tp)
            if it is not None:
                split = sum(1 for m in it.members if _dispatches_on_literal(m))
                interfaces.add_row(
                    escape(it.name),
                    str(len(it.static_members)),
                    str(len(it.constructors)),
                    str(split),
                )
            elif tp.tag == TypeTag.ENUM:
                enums.add_row(escape(tp.name), str(len(tp.cases)), tp.type.value)

    if interfaces.row_count:
        console.print(interfaces)
    if enums.row_count:
        console.print(enums)


# ── Gaps ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("ir_file")
@click.pass_obj
def gaps(config, ir_file: str):
    """List constructs the parser left as TODO."""
    from fnmatch import fnmatch

    from dtsir.ir.walk import find_gaps

    root = _load_file(ir_file)
    found = [
        g for g in find_gaps(root) if not any(fnmatch(g.path, pat) for pat in config.ignore)
    ]

    if not found:
        console.print("[green]No coverage gaps.[/]")
        return

    console.print(f"[yellow]{len(found)} coverage gap(s):[/]")
    for gap in found:
        parent = gap.parent.value if gap.parent else "-"
        console.print(f"  [yellow]![/] {escape(gap.path)} (in {parent})")

    if config.fail_on_gaps:
        sys.exit(1)


# ── Check ────────────────────────────────────────────────────────────


@main.command()
@click.argument("ir_file")
@click.option("--strict", is_flag=True, help="Treat warnings as errors")
@click.pass_obj
def check(config, ir_file: str, strict: bool):
    """Run the advisory lint over a dumped file."""
    from dtsir.ir.lint import lint

    root = _load_file(ir_file)
    result = lint(root, ignore=config.ignore)

    for issue in result.warnings:
        console.print(
            f"  [yellow]![/] [{issue.code}] {escape(issue.path)}: {escape(issue.message)}"
        )
    for issue in result.infos:
        console.print(f"  [dim]-[/] [{issue.code}] {escape(issue.path)}: {escape(issue.message)}")

    console.print(Panel(result.summary(), title="Lint Result"))

    if (strict or config.strict) and not result.clean:
        console.print("\n[red]FAIL[/] (strict mode: warnings treated as errors)")
        sys.exit(1)


if __name__ == "__main__":
    main()
