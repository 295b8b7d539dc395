"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import codecs
import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILE_NAME = "logscan.toml"
DEFAULT_ENCODING = "utf-8"
MAX_WORKERS_CAP = 4096
DEFAULT_AUDIT_PATH = Path(".logscan") / "scan.jsonl"


@dataclass(slots=True, frozen=True)
class ScanSettings:
    """Worker pool and file decoding settings."""

    encoding: str = DEFAULT_ENCODING
    clamp_workers: bool = False
    max_workers: int | None = None


@dataclass(slots=True, frozen=True)
class AuditConfig:
    """Scan event log settings."""

    enabled: bool
    path: Path


@dataclass(slots=True, frozen=True)
class ScanConfig:
    """Fully merged scan configuration."""

    work_dir: Path
    scan: ScanSettings
    audit: AuditConfig

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot."""
        return {
            "work_dir": str(self.work_dir),
            "scan": {
                "encoding": self.scan.encoding,
                "clamp_workers": self.scan.clamp_workers,
                "max_workers": self.scan.max_workers,
            },
            "audit": {
                "enabled": self.audit.enabled,
                "path": str(self.audit.path),
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    encoding: str | None = None
    clamp_workers: bool | None = None
    max_workers: int | None = None
    audit_path: Path | None = None


def default_config(work_dir: Path) -> ScanConfig:
    """Build default config for a given working directory."""
    resolved = work_dir.resolve()
    return ScanConfig(
        work_dir=resolved,
        scan=ScanSettings(),
        audit=AuditConfig(enabled=False, path=resolved / DEFAULT_AUDIT_PATH),
    )


def load_config_file(work_dir: Path) -> dict[str, object]:
    """Load optional logscan.toml from the working directory."""
    config_path = work_dir / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_str(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value:
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    return value


def _optional_encoding(value: object, name: str, default: str) -> str:
    encoding = _optional_str(value, name, default)
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ValueError(f"Config field '{name}' must name a known text encoding.") from exc
    return encoding


def _optional_positive_int_with_cap(
    value: object,
    name: str,
    default: int | None,
    cap: int,
) -> int | None:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value


def merge_config(
    base: ScanConfig, payload: dict[str, object], overrides: CliOverrides
) -> ScanConfig:
    """Merge defaults, config file, then CLI overrides."""
    scan_payload = _get_table(payload, "scan")
    audit_payload = _get_table(payload, "audit")

    encoding = _optional_encoding(
        scan_payload.get("encoding"), "scan.encoding", base.scan.encoding
    )
    clamp_workers = _optional_bool(
        scan_payload.get("clamp_workers"), "scan.clamp_workers", base.scan.clamp_workers
    )
    max_workers = _optional_positive_int_with_cap(
        scan_payload.get("max_workers"),
        "scan.max_workers",
        base.scan.max_workers,
        MAX_WORKERS_CAP,
    )

    audit_enabled = _optional_bool(
        audit_payload.get("enabled"), "audit.enabled", base.audit.enabled
    )
    audit_path = base.audit.path
    if "path" in audit_payload:
        raw_path = _optional_str(audit_payload["path"], "audit.path", str(base.audit.path))
        audit_path = base.work_dir / raw_path

    merged = ScanConfig(
        work_dir=base.work_dir,
        scan=ScanSettings(
            encoding=encoding,
            clamp_workers=clamp_workers,
            max_workers=max_workers,
        ),
        audit=AuditConfig(enabled=audit_enabled, path=audit_path),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: ScanConfig, overrides: CliOverrides) -> ScanConfig:
    """Apply startup overrides at highest precedence."""
    encoding = _optional_encoding(overrides.encoding, "overrides.encoding", config.scan.encoding)
    clamp_workers = _optional_bool(
        overrides.clamp_workers, "overrides.clamp_workers", config.scan.clamp_workers
    )
    max_workers = _optional_positive_int_with_cap(
        overrides.max_workers,
        "overrides.max_workers",
        config.scan.max_workers,
        MAX_WORKERS_CAP,
    )
    audit = config.audit
    if overrides.audit_path is not None:
        audit = AuditConfig(enabled=True, path=(config.work_dir / overrides.audit_path).resolve())
    return ScanConfig(
        work_dir=config.work_dir,
        scan=ScanSettings(
            encoding=encoding,
            clamp_workers=clamp_workers,
            max_workers=max_workers,
        ),
        audit=audit,
    )


def load_effective_config(work_dir: Path, overrides: CliOverrides | None = None) -> ScanConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    resolved = work_dir.resolve()
    base = default_config(resolved)
    payload = load_config_file(resolved)
    return merge_config(base, payload, overrides or CliOverrides())
