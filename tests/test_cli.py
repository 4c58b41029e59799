from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from phonemap.cli import main
from phonemap.config import _ENV_MAP


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path) -> None:
    for key in [*_ENV_MAP, "PHONEMAP_CONFIG"]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PHONEMAP_LOG_LEVEL", "ERROR")
    monkeypatch.chdir(tmp_path)


def test_lookup_offline_json(tmp_path: Path) -> None:
    report_path = tmp_path / "out.json"
    result = CliRunner().invoke(
        main,
        ["lookup", "+16502530000", "--enricher", "offline", "--json", "--report", str(report_path)],
    )
    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert report["details"]["countryCode"] == "US"
    assert report["details"]["e164Format"] == "+16502530000"
    assert report["map"]["source"] in ("region", "country")
    assert json.loads(report_path.read_text(encoding="utf-8"))["details"] == report["details"]


def test_lookup_offline_human_output() -> None:
    result = CliRunner().invoke(main, ["lookup", "+442071234567", "--enricher", "offline"])
    assert result.exit_code == 0, result.output
    assert "Phone Number Details:" in result.output
    assert "+442071234567" in result.output
    assert "Approximate Location:" in result.output


def test_lookup_rejects_malformed_number() -> None:
    result = CliRunner().invoke(main, ["lookup", "+0123", "--enricher", "offline"])
    assert result.exit_code != 0
    assert "valid international phone number" in result.output


def test_lookup_openai_without_key_fails_cleanly() -> None:
    result = CliRunner().invoke(main, ["lookup", "+16502530000"])
    assert result.exit_code != 0
    assert "BackendConfigurationError" in result.output
