"""Tests for configuration loading and the dtsir CLI."""

import tempfile
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from dtsir import __version__
from dtsir.cli import main
from dtsir.config import ToolConfig, load_config
from dtsir.ir.models import (
    TODO,
    FsEnum,
    FsEnumCase,
    FsEnumCaseType,
    FsFile,
    FsFunction,
    FsFunctionKind,
    FsInterface,
    FsModule,
    FsParam,
    FsProperty,
    FsStringLiteral,
    simple_type,
)
from dtsir.ir.serialize import dump_yaml


def _file(with_gap: bool = False) -> FsFile:
    members = [
        FsFunction(name="Emitter", kind=FsFunctionKind.CONSTRUCTOR),
        FsFunction(name="create", is_static=True),
        FsFunction(
            name="on",
            params=(FsParam(name="event", type=FsStringLiteral(value="data")),),
        ),
    ]
    if with_gap:
        members.append(FsProperty(name="legacy", type=TODO))
    emitter = FsInterface(name="Emitter", full_name="events.Emitter", members=tuple(members))
    mode = FsEnum(
        name="Mode",
        cases=(
            FsEnumCase(name="Fast", type=FsEnumCaseType.STRING, value="fast"),
            FsEnumCase(name="Slow", type=FsEnumCaseType.NUMERIC, value="1"),
        ),
    )
    events = FsModule(name="events", types=(emitter, mode))
    return FsFile(name="events.d.ts", modules=(FsModule(name="", types=(events,)),))


# --- Config Tests ---


def test_config_defaults_without_file():
    runner = CliRunner()
    with runner.isolated_filesystem():
        assert load_config() == ToolConfig()


def test_load_config():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.safe_dump({"fail_on_gaps": True, "ignore": ["*/legacy/*"], "extra": 1}, f)
        f.flush()
        config = load_config(f.name)

    assert config.fail_on_gaps is True
    assert config.strict is False
    assert config.ignore == ["*/legacy/*"]


def test_load_empty_config():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write("")
        f.flush()
        config = load_config(f.name)

    assert config == ToolConfig()



def test_single_ignore_pattern_is_wrapped():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write("ignore: 'lib/*'\n")
        f.flush()
        config = load_config(f.name)

    assert config.ignore == ["lib/*"]


def test_non_mapping_config_rejected():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write("- strict\n- fail_on_gaps\n")
        f.flush()
        with pytest.raises(ValueError, match="must be a mapping"):
            load_config(f.name)


# --- CLI Tests ---


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_summary():
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(_file(), "events.yaml")
        result = runner.invoke(main, ["summary", "events.yaml"])

    assert result.exit_code == 0, result.output
    assert "events.d.ts" in result.output
    assert "Emitter" in result.output
    assert "Mode" in result.output
    assert "string" in result.output


def test_summary_rejects_non_file_root():
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(FsModule(name="m"), "module.yaml")
        result = runner.invoke(main, ["summary", "module.yaml"])

    assert result.exit_code == 1
    assert "Expected a file node" in result.output


def test_bad_dump_exits_nonzero():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("bad.yaml").write_text("tag: class\n")
        result = runner.invoke(main, ["gaps", "bad.yaml"])

    assert result.exit_code == 1
    assert "Failed to load" in result.output


def test_gaps_none():
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(_file(), "events.yaml")
        result = runner.invoke(main, ["gaps", "events.yaml"])

    assert result.exit_code == 0
    assert "No coverage gaps" in result.output


def test_gaps_reported():
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(_file(with_gap=True), "events.yaml")
        result = runner.invoke(main, ["gaps", "events.yaml"])

    assert result.exit_code == 0
    assert "1 coverage gap(s)" in result.output
    assert "legacy" in result.output


def test_gaps_fail_from_config():
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(_file(with_gap=True), "events.yaml")
        Path(".dtsir.yaml").write_text("fail_on_gaps: true\n")
        result = runner.invoke(main, ["gaps", "events.yaml"])

    assert result.exit_code == 1


def test_gaps_ignored_by_config():
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(_file(with_gap=True), "events.yaml")
        Path("tool.yaml").write_text("fail_on_gaps: true\nignore:\n  - '*/legacy/*'\n")
        result = runner.invoke(main, ["--config", "tool.yaml", "gaps", "events.yaml"])

    assert result.exit_code == 0
    assert "No coverage gaps" in result.output


def test_check_clean():
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(_file(), "events.yaml")
        result = runner.invoke(main, ["check", "--strict", "events.yaml"])

    assert result.exit_code == 0
    assert "CLEAN" in result.output


def test_check_strict_fails_on_warnings():
    root = FsFile(
        name="bad.d.ts", modules=(FsModule(name="", types=(FsEnum(name="Empty"),)),)
    )
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(root, "bad.yaml")
        lenient = runner.invoke(main, ["check", "bad.yaml"])
        strict = runner.invoke(main, ["check", "--strict", "bad.yaml"])

    assert lenient.exit_code == 0
    assert "ENUM_NO_CASES" in lenient.output
    assert strict.exit_code == 1
    assert "FAIL" in strict.output


def test_missing_config_file_is_a_usage_error():
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(_file(), "events.yaml")
        result = runner.invoke(main, ["--config", "missing.yaml", "gaps", "events.yaml"])

    assert result.exit_code == 2
    assert "does not exist" in result.output


def test_invalid_config_reported():
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(_file(), "events.yaml")
        Path("tool.yaml").write_text("- strict\n")
        result = runner.invoke(main, ["--config", "tool.yaml", "gaps", "events.yaml"])

    assert result.exit_code == 1
    assert "Invalid config" in result.output


def test_summary_reports_wrongly_typed_slots():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("bad.yaml").write_text(
            "tag: file\nname: bad.d.ts\nmodules:\n  - tag: interface\n    name: I\n"
        )
        result = runner.invoke(main, ["summary", "bad.yaml"])

    assert result.exit_code == 1
    assert "Failed to load" in result.output
    assert "expected 'module'" in result.output


def test_summary_reports_scalar_enum_case():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("bad.yaml").write_text(
            "tag: file\nname: bad.d.ts\nmodules:\n"
            "  - tag: module\n    name: ''\n    types:\n"
            "      - tag: enum\n        name: Mode\n        cases: [1]\n"
        )
        result = runner.invoke(main, ["summary", "bad.yaml"])

    assert result.exit_code == 1
    assert "Failed to load" in result.output


def test_summary_prints_names_literally():
    root = FsFile(
        name="[bold]x.d.ts",
        modules=(
            FsModule(
                name="",
                types=(
                    FsInterface(name="[red]I", full_name="I"),
                    FsEnum(name="[b]E", cases=(FsEnumCase(name="A"),)),
                ),
            ),
        ),
    )
    runner = CliRunner()
    with runner.isolated_filesystem():
        dump_yaml(root, "markup.yaml")
        result = runner.invoke(main, ["summary", "markup.yaml"])

    assert result.exit_code == 0, result.output
    assert "[bold]x.d.ts" in result.output
    assert "[red]I" in result.output
    assert "[b]E" in result.output
