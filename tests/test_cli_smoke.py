from __future__ import annotations

import logging
from pathlib import Path

import orjson
import pytest

from cli import main
from modpath.codec import module_cache_dir


def _write_project(tmp_path: Path) -> tuple[Path, Path]:
    gopath = tmp_path / "gopath"
    root = tmp_path / "repo"
    (root / "vendor").mkdir(parents=True)
    (root / "go.mod").write_text("module example.com/app\n", encoding="utf-8")
    (root / "vendor" / "modules.txt").write_text(
        "# github.com/a/b v1.0.0\n## explicit\ngithub.com/a/b/sub\n",
        encoding="utf-8",
    )

    module_dir = module_cache_dir(
        "github.com/a/b", "v1.0.0", cache_root=gopath / "pkg" / "mod"
    )
    (module_dir / "sub").mkdir(parents=True)
    (module_dir / "top.h").write_text("// top\n", encoding="utf-8")
    (module_dir / "sub" / "s.h").write_text("// s\n", encoding="utf-8")
    return root, gopath


def test_cli_vendor_smoke(tmp_path: Path) -> None:
    root, gopath = _write_project(tmp_path)

    exit_code = main(
        ["vendor", str(root), "--copy", "**/*.h", "--gopath", str(gopath)]
    )

    assert exit_code == 0
    assert (root / "vendor" / "github.com/a/b/top.h").is_file()
    assert (root / "vendor" / "github.com/a/b/sub/s.h").is_file()


def test_cli_vendor_no_fullcopy_filters_by_usage(tmp_path: Path) -> None:
    root, gopath = _write_project(tmp_path)

    exit_code = main(
        [
            "vendor",
            str(root),
            "--copy",
            "**/*.h",
            "--no-fullcopy",
            "--gopath",
            str(gopath),
        ]
    )

    assert exit_code == 0
    assert not (root / "vendor" / "github.com/a/b/top.h").exists()
    assert (root / "vendor" / "github.com/a/b/sub/s.h").is_file()


def test_cli_vendor_verbose_logs_paths(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    root, gopath = _write_project(tmp_path)
    caplog.set_level(logging.INFO)

    exit_code = main(
        ["vendor", str(root), "-v", "--copy", "**/*.h", "--gopath", str(gopath)]
    )

    assert exit_code == 0
    assert "vendoring github.com/a/b/sub/s.h" in caplog.text


def test_cli_uses_config_file_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root, gopath = _write_project(tmp_path)
    (root / "modvendor.toml").write_text(
        f'copy = "sub/*.h"\ngopath = "{gopath}"\n', encoding="utf-8"
    )

    monkeypatch.chdir(root)
    exit_code = main(["vendor"])

    assert exit_code == 0
    assert (root / "vendor" / "github.com/a/b/sub/s.h").is_file()
    assert not (root / "vendor" / "github.com/a/b/top.h").exists()


def test_cli_plan_prints_json_lines(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root, gopath = _write_project(tmp_path)

    exit_code = main(
        ["plan", str(root), "--copy", "sub/*.h", "--gopath", str(gopath)]
    )

    assert exit_code == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    record = orjson.loads(lines[0])
    assert record["module"] == "github.com/a/b"
    assert record["source"].endswith("/sub/s.h")
    assert record["destination"] == str(
        root.resolve() / "vendor" / "github.com/a/b/sub/s.h"
    )
    assert not (root / "vendor" / "github.com").exists()


def test_cli_verify_round_trip(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root, gopath = _write_project(tmp_path)
    args = [str(root), "--copy", "**/*.h", "--gopath", str(gopath)]

    assert main(["verify", *args]) == 1
    assert "missing: github.com/a/b/top.h" in capsys.readouterr().err

    assert main(["vendor", *args]) == 0
    assert main(["verify", *args]) == 0


def test_cli_reports_missing_go_mod(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["vendor", str(tmp_path)])

    assert exit_code == 1
    assert "error: cannot find `go.mod` file" in capsys.readouterr().err


def test_cli_reports_missing_manifest(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "go.mod").write_text("module example.com/app\n", encoding="utf-8")

    exit_code = main(["vendor", str(tmp_path)])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert "cannot find vendor/modules.txt" in captured.err
    assert "go mod vendor" in captured.err


def test_cli_reports_missing_module_dir(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root, _ = _write_project(tmp_path)

    exit_code = main(
        ["vendor", str(root), "--gopath", str(tmp_path / "empty-gopath")]
    )

    assert exit_code == 1
    err = capsys.readouterr().err
    assert "error: module path" in err
    assert "import_path=github.com/a/b" in err
