from __future__ import annotations

from pathlib import Path

from logscan.config import CliOverrides, default_config, load_effective_config


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_effective_config(tmp_path)

    assert config == default_config(tmp_path)
    assert config.scan.encoding == "utf-8"
    assert config.scan.clamp_workers is False
    assert config.scan.max_workers is None
    assert config.audit.enabled is False


def test_merge_order_defaults_then_file_then_cli(tmp_path: Path) -> None:
    (tmp_path / "logscan.toml").write_text(
        "\n".join(
            [
                "[scan]",
                'encoding = "latin-1"',
                "clamp_workers = true",
                "max_workers = 16",
                "",
                "[audit]",
                "enabled = true",
                'path = "out/events.jsonl"',
            ]
        ),
        encoding="utf-8",
    )
    overrides = CliOverrides(max_workers=32, clamp_workers=False)

    config = load_effective_config(tmp_path, overrides=overrides)

    assert config.scan.encoding == "latin-1"
    assert config.scan.max_workers == 32
    assert config.scan.clamp_workers is False
    assert config.audit.enabled is True
    assert config.audit.path == tmp_path.resolve() / "out" / "events.jsonl"


def test_audit_path_override_enables_audit(tmp_path: Path) -> None:
    config = load_effective_config(tmp_path, overrides=CliOverrides(audit_path=Path("a.jsonl")))

    assert config.audit.enabled is True
    assert config.audit.path == (tmp_path / "a.jsonl").resolve()


def test_public_dict_snapshot(tmp_path: Path) -> None:
    snapshot = load_effective_config(tmp_path).to_public_dict()

    assert snapshot["scan"] == {
        "encoding": "utf-8",
        "clamp_workers": False,
        "max_workers": None,
    }
    assert snapshot["audit"]["enabled"] is False
