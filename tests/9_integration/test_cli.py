# tests/9_integration/test_cli.py
"""Tests for the command-line entry point."""

import json
from pathlib import Path

import pytest

import sol_flattener.cli as mod_cli
import sol_flattener.meta as mod_meta
from tests.utils import file_markers, make_project


PROJECT = {
    "contracts/A.sol": (
        'pragma solidity ^0.5.0;\nimport "./B.sol";\ncontract A is B {}\n'
    ),
    "contracts/B.sol": "pragma solidity ^0.5.0;\ncontract B {}\n",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "LOG_LEVEL",
        "SOL_FLATTENER_LOG_LEVEL",
        "SOL_FLATTENER_ROOT",
        "SOL_FLATTENER_DEPENDENCY_DIRS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_flatten_to_stdout(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    root = make_project(tmp_path, PROJECT)
    monkeypatch.chdir(root)

    # --- execute ---
    code = mod_cli.main(["contracts/A.sol"])

    # --- verify ---
    out, err = capsys.readouterr()
    assert code == 0
    assert out == (
        "pragma solidity ^0.5.0;\n"
        "\n"
        "// File: contracts/B.sol\n"
        "contract B {}\n"
        "// File: contracts/A.sol\n"
        "contract A is B {}\n"
    )
    assert err == ""


def test_flatten_to_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    root = make_project(tmp_path, PROJECT)
    monkeypatch.chdir(root)

    code = mod_cli.main(["contracts/A.sol", "-o", "build/flat/Flat.sol"])

    out = capsys.readouterr().out
    assert code == 0
    flat = (root / "build" / "flat" / "Flat.sol").read_text(encoding="utf-8")
    assert file_markers(flat) == ["contracts/B.sol", "contracts/A.sol"]
    assert "creating directory tree" in out
    assert "contract" not in out


def test_existing_output_is_replaced(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = make_project(tmp_path, PROJECT)
    (root / "Flat.sol").write_text("old bundle\n", encoding="utf-8")
    monkeypatch.chdir(root)

    assert mod_cli.main(["contracts/A.sol", "--output", "Flat.sol"]) == 0

    flat = (root / "Flat.sol").read_text(encoding="utf-8")
    assert "old bundle" not in flat
    assert flat.startswith("pragma solidity ^0.5.0;\n")


def test_run_from_a_subdirectory(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    root = make_project(tmp_path, PROJECT)
    monkeypatch.chdir(root / "contracts")

    assert mod_cli.main(["A.sol"]) == 0
    assert file_markers(capsys.readouterr().out) == [
        "contracts/B.sol",
        "contracts/A.sol",
    ]


def test_explicit_root(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    make_project(tmp_path / "proj", PROJECT, marker=None)
    monkeypatch.chdir(tmp_path)

    assert mod_cli.main(["proj/contracts/A.sol", "--root", "proj"]) == 0
    assert file_markers(capsys.readouterr().out) == [
        "contracts/B.sol",
        "contracts/A.sol",
    ]


def test_dependency_dir_option(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    root = make_project(
        tmp_path,
        {
            "A.sol": 'import "forge-std/Test.sol";\ncontract A {}',
            "lib/forge-std/Test.sol": "contract Test {}",
        },
    )
    monkeypatch.chdir(root)

    assert mod_cli.main(["A.sol", "--dependency-dir", "lib"]) == 0
    assert file_markers(capsys.readouterr().out) == ["forge-std/Test.sol", "A.sol"]


def test_config_file_output(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    root = make_project(tmp_path, PROJECT)
    (root / ".sol-flattener.json").write_text(
        json.dumps({"output": "dist/Flat.sol"}), encoding="utf-8"
    )
    monkeypatch.chdir(root / "contracts")

    assert mod_cli.main(["A.sol"]) == 0
    assert (root / "dist" / "Flat.sol").is_file()
    assert "contract" not in capsys.readouterr().out


def test_no_files_prints_usage(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    assert mod_cli.main([]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert "Usage: sol-flattener <files>" in err


def test_missing_import(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    root = make_project(tmp_path, {"A.sol": 'import "./Nope.sol";\ncontract A {}'})
    monkeypatch.chdir(root)

    assert mod_cli.main(["A.sol"]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert "Could not find file 'Nope.sol'" in err
    assert "Traceback" not in err


def test_cycle_writes_no_output_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    root = make_project(
        tmp_path,
        {"A.sol": 'import "./B.sol";', "B.sol": 'import "./A.sol";'},
    )
    monkeypatch.chdir(root)

    assert mod_cli.main(["A.sol", "-o", "Flat.sol"]) == 1

    assert not (root / "Flat.sol").exists()
    err = capsys.readouterr().err
    assert "There is a cycle in the dependency graph" in err
    assert "\tA.sol\n\tB.sol" in err


def test_outside_a_project(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / "A.sol").write_text("contract A {}", encoding="utf-8")
    (tmp_path / ".sol-flattener.json").write_text(
        json.dumps({"root_markers": ["sol-flattener-test-marker.js"]}),
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    assert mod_cli.main(["A.sol"]) == 1
    assert "Must be run inside a project" in capsys.readouterr().err


def test_missing_explicit_root(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    assert mod_cli.main(["A.sol", "--root", "missing"]) == 1
    assert "The specified root directory does not exist" in capsys.readouterr().err


def test_bad_config_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    root = make_project(tmp_path, PROJECT)
    (root / ".sol-flattener.json").write_text("{ nope", encoding="utf-8")
    monkeypatch.chdir(root)

    assert mod_cli.main(["contracts/A.sol"]) == 1
    assert "Error while loading configuration file" in capsys.readouterr().err


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert mod_cli.main(["--version"]) == 0
    assert capsys.readouterr().out.startswith(mod_meta.PROGRAM_DISPLAY)


def test_unknown_option_suggests_a_fix(
    capsys: pytest.CaptureFixture[str],
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        mod_cli.main(["A.sol", "--ouptut", "x.sol"])
    assert exc_info.value.code == 2
    assert "Hint: did you mean --output?" in capsys.readouterr().err


def test_unexpected_error_is_reported(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    root = make_project(tmp_path, PROJECT)
    monkeypatch.chdir(root)

    def boom(*_args: object, **_kwargs: object) -> None:
        raise KeyError("kaboom")

    monkeypatch.setattr(mod_cli, "flatten", boom)

    assert mod_cli.main(["contracts/A.sol"]) == 1
    assert "Unexpected internal error" in capsys.readouterr().err


def test_falls_back_to_safe_log_when_logging_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    # --- setup ---
    root = make_project(tmp_path, PROJECT)
    monkeypatch.chdir(root)
    called: dict[str, str] = {}

    def broken_report(*_args: object, **_kwargs: object) -> None:
        xmsg = "handler exploded"
        raise RuntimeError(xmsg)

    def fake_safe_log(msg: str) -> None:
        called["msg"] = msg

    monkeypatch.setattr(mod_cli, "_report", broken_report)
    monkeypatch.setattr(mod_cli, "safeLog", fake_safe_log)

    # --- execute ---
    code = mod_cli.main(["Nope.sol"])

    # --- verify ---
    assert code == 1
    assert called["msg"].startswith("[FATAL] Logging failed while reporting:")
    assert "Nope.sol" in called["msg"]
