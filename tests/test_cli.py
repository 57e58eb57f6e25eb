"""Tests for the command line interface."""

import json

import pytest

from theme_toolkit import cli
from theme_toolkit.cli import main
from theme_toolkit.upload import parse_theme_file


@pytest.fixture
def theme_zip(tmp_path, make_zip, canonical_manifest, valid_preset):
    manifest = dict(canonical_manifest, presets="presets.json")
    path = tmp_path / "theme.zip"
    path.write_bytes(make_zip({
        "theme.json": manifest,
        "styles.css": "body { color: #222; }",
        "presets.json": [valid_preset],
    }))
    return path


def test_inspect_json(theme_zip, capsys):
    assert main(["inspect", str(theme_zip), "--json"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["ok"] is True
    assert output["theme"]["name"] == "Test Theme"
    assert output["theme"]["presets"][0]["name"] == "Light"
    assert output["theme"]["assets"] == []


def test_inspect_text(theme_zip, capsys):
    assert main(["inspect", str(theme_zip)]) == 0
    out = capsys.readouterr().out
    assert "Name: Test Theme" in out
    assert "Presets: 1" in out


def test_inspect_failure_json(tmp_path, capsys):
    path = tmp_path / "broken.zip"
    path.write_bytes(b"not a zip")
    assert main(["inspect", str(path), "--json"]) == 1
    output = json.loads(capsys.readouterr().out)
    assert output == {
        "ok": False,
        "error": {
            "type": "invalid_zip",
            "message": "Failed to read zip file. Make sure it's a valid zip archive.",
        },
    }


def test_inspect_missing_file(tmp_path, capsys):
    assert main(["inspect", str(tmp_path / "missing.zip")]) == 1
    assert "Error" in capsys.readouterr().out


def test_convert(theme_zip, tmp_path, capsys):
    output = tmp_path / "converted.zip"
    assert main(["convert", str(theme_zip), str(output)]) == 0
    assert "Written:" in capsys.readouterr().out

    result = parse_theme_file(output)
    assert result.ok
    assert result.theme == parse_theme_file(theme_zip).theme


def test_convert_reports_errors(tmp_path, make_zip, capsys):
    source = tmp_path / "nomanifest.zip"
    source.write_bytes(make_zip({"styles.css": "body {}"}))
    assert main(["convert", str(source), str(tmp_path / "out.zip")]) == 1
    assert "missing_manifest" in capsys.readouterr().out
    assert not (tmp_path / "out.zip").exists()


def test_convert_with_config(theme_zip, tmp_path):
    config = tmp_path / "limits.yaml"
    config.write_text("max_archive_bytes: 10\n")
    assert main(["convert", str(theme_zip), str(tmp_path), "--config", str(config)]) == 1


def test_no_command(capsys):
    assert main([]) == 1


@pytest.mark.parametrize("argv_prefix, argv_suffix", [
    (["-v"], []),
    ([], ["-v"]),
])
def test_verbose_flag_in_either_position(theme_zip, monkeypatch, argv_prefix, argv_suffix):
    calls = []
    monkeypatch.setattr(cli.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    assert main(argv_prefix + ["inspect", str(theme_zip)] + argv_suffix) == 0
    assert calls and calls[0]["level"] == cli.logging.DEBUG


def test_verbose_off_by_default(theme_zip, monkeypatch):
    calls = []
    monkeypatch.setattr(cli.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    assert main(["inspect", str(theme_zip)]) == 0
    assert calls == []
