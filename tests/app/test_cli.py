from __future__ import annotations

import json
from signal import SIGINT
from typing import TYPE_CHECKING

import pytest

from datajoin.ui import cli as cli_module

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATAJOIN_KEY_FIELD", raising=False)
    monkeypatch.delenv("DATAJOIN_LOG_LEVEL", raising=False)


def _snapshots(tmp_path: Path) -> tuple[str, str]:
    old = tmp_path / "old.json"
    new = tmp_path / "new.jsonl"
    old.write_text(json.dumps([{"id": "A"}, {"id": "B", "v": 1}, {"id": "C"}]))
    new.write_text('{"id": "B", "v": 2}\n{"id": "C"}\n{"id": "D"}\n')
    return str(old), str(new)


def test_cli_diff_prints_partition(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    old, new = _snapshots(tmp_path)

    cli_module.main(["diff", old, new, "--key", "id"])

    assert capsys.readouterr().out.splitlines() == [
        "- A",
        "~ B",
        "= C",
        "+ D",
        "entering=1 updating=2 exiting=1",
    ]


def test_cli_diff_uses_key_field_from_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("DATAJOIN_KEY_FIELD", "id")
    old, new = _snapshots(tmp_path)

    cli_module.main(["diff", old, new])

    assert capsys.readouterr().out.splitlines()[-1] == "entering=1 updating=2 exiting=1"


def test_cli_diff_by_index(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    old, new = _snapshots(tmp_path)

    cli_module.main(["diff", old, new, "--by-index"])

    assert capsys.readouterr().out.splitlines()[-1] == "entering=0 updating=3 exiting=0"


def test_cli_passes_arguments_to_service(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    captured: dict[str, object] = {}

    def fake_diff(old_path: Path, new_path: Path, **kwargs: object) -> None:
        captured.update(old_path=old_path, new_path=new_path, **kwargs)
        raise RuntimeError("stop")

    monkeypatch.setattr(cli_module, "diff_snapshots", fake_diff)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["diff", "old.json", "new.json", "--key", "name"])

    assert excinfo.value.code == 1
    assert str(captured["old_path"]) == "old.json"
    assert captured["key_field"] == "name"


def test_cli_duplicate_keys_exit_with_error(tmp_path: Path) -> None:
    old = tmp_path / "old.json"
    new = tmp_path / "new.json"
    old.write_text("[]")
    new.write_text(json.dumps([{"id": "X"}, {"id": "X"}]))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["diff", str(old), str(new), "--key", "id"])

    assert excinfo.value.code == 1


def test_cli_rejects_conflicting_keying_flags() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["diff", "a.json", "b.json", "--key", "id", "--by-index"])

    assert excinfo.value.code == 2


def test_cli_invalid_log_level_exits_with_validation_code(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("DATAJOIN_LOG_LEVEL", "loud")

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["diff", "a.json", "b.json"])

    assert excinfo.value.code == 2


def test_sigint_handler_exits_cleanly() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.sigint_handler(SIGINT, None)

    assert excinfo.value.code == 0


def test_run_loads_dotenv_and_installs_sigint_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[object] = []

    monkeypatch.setattr(cli_module, "load_dotenv", lambda: calls.append("dotenv"))
    monkeypatch.setattr(
        cli_module,
        "signal",
        lambda signum, handler: calls.append((signum, handler)),
    )
    monkeypatch.setattr(cli_module, "main", lambda: calls.append("main"))

    cli_module.run()

    assert calls == ["dotenv", (SIGINT, cli_module.sigint_handler), "main"]
