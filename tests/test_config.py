"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from unicatalog.config.policies import Policies, load_policies
from unicatalog.config.settings import PROJECT_ROOT, Settings


def test_policies_have_defaults() -> None:
    policies = Policies()

    assert policies.catalog.version
    assert "Traditional University" in policies.catalog.university_types
    assert policies.listing.default_logo == "/logos/universities/default.svg"
    assert policies.programs.max_aps == 50


def test_load_policies_from_dict() -> None:
    policies = load_policies({"listing": {"unknown_abbreviation": "N/A"}})

    assert policies.listing.unknown_abbreviation == "N/A"
    assert policies.listing.abbreviation_length == 3


def test_load_policies_from_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_policies(tmp_path / "missing.yaml")


def test_policy_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UNICATALOG_POLICY__PROGRAMS__MAX_APS", "45")

    policies = load_policies({})

    assert policies.programs.max_aps == 45


def test_invalid_policy_values_are_rejected() -> None:
    with pytest.raises(ValueError):
        load_policies({"listing": {"abbreviation_length": 0}})


def test_settings_merge_default_and_environment_yaml(tmp_path: Path) -> None:
    (tmp_path / "default.yaml").write_text(
        yaml.safe_dump(
            {
                "sources": ["data/base.json", "data/update.json"],
                "catalog": {"version": "1.0.0", "source_tag": "default"},
            }
        ),
        encoding="utf-8",
    )
    (tmp_path / "testing.yaml").write_text(
        yaml.safe_dump({"catalog": {"source_tag": "testing"}}),
        encoding="utf-8",
    )

    settings = Settings(config_dir=tmp_path, environment="testing")

    assert settings.environment == "testing"
    assert settings.catalog_version == "1.0.0"
    assert settings.policies.catalog.source_tag == "testing"
    assert settings.source_files == [
        PROJECT_ROOT / "data" / "base.json",
        PROJECT_ROOT / "data" / "update.json",
    ]


def test_settings_nested_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UNICATALOG_SETTINGS__PATHS__OUTPUT_DIR", str(tmp_path / "out"))

    settings = Settings(config_dir=tmp_path)

    assert settings.paths.output_dir == tmp_path / "out"


def test_settings_create_dirs(tmp_path: Path) -> None:
    settings = Settings(
        config_dir=tmp_path,
        create_dirs=True,
        paths={
            "data_dir": tmp_path / "data",
            "output_dir": tmp_path / "output",
            "logs_dir": tmp_path / "logs",
        },
    )

    assert (tmp_path / "logs").is_dir()
    assert settings.log_file == tmp_path / "logs" / "unicatalog.log"


def test_repository_default_config_loads() -> None:
    settings = Settings()

    assert settings.policies.catalog.version == "8.0.0-complete-comprehensive-2025"
    assert settings.policies.listing.unknown_name == "Unknown University"
