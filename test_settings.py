"""
Settings Test Suite

Tests for persistent settings load/save.

Sections:
    1. Load — missing file, corrupt file, partial, unknown keys
    2. Environment — PORT override
    3. Save — round-trip, bad path
"""
import json

from settings import DEFAULTS, load_settings, save_settings

# ── 1. Load ──────────────────────────────────────────────────────────────────


def test_load_missing_file_returns_defaults(tmp_path):
    """Loading from a nonexistent file returns DEFAULTS."""
    path = tmp_path / "no_such_file.json"
    result = load_settings(path=path, environ={})
    assert result == DEFAULTS


def test_load_corrupt_file_returns_defaults(tmp_path):
    """Loading from a corrupt (non-JSON) file returns DEFAULTS."""
    path = tmp_path / "bad.json"
    path.write_text("not json at all {{{")
    result = load_settings(path=path, environ={})
    assert result == DEFAULTS


def test_load_non_object_returns_defaults(tmp_path):
    """A JSON list instead of an object is ignored."""
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]")
    assert load_settings(path=path, environ={}) == DEFAULTS


def test_partial_file_fills_missing_keys(tmp_path):
    """Keys absent from the file fall back to DEFAULTS."""
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({"port": 8080}))
    result = load_settings(path=path, environ={})
    assert result["port"] == 8080
    assert result["host"] == DEFAULTS["host"]
    assert result["log_level"] == DEFAULTS["log_level"]


def test_unknown_keys_ignored(tmp_path):
    """Keys not in DEFAULTS are dropped."""
    path = tmp_path / "extra.json"
    path.write_text(json.dumps({"seed": 7, "colour": "red"}))
    result = load_settings(path=path, environ={})
    assert result["seed"] == 7
    assert "colour" not in result


def test_defaults_not_mutated(tmp_path):
    """Loading returns a copy; DEFAULTS stay intact."""
    result = load_settings(path=tmp_path / "none.json", environ={})
    result["port"] = 1
    assert DEFAULTS["port"] == 3000


# ── 2. Environment ───────────────────────────────────────────────────────────


def test_port_env_overrides_file(tmp_path):
    """A numeric PORT variable wins over the stored port."""
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"port": 8080}))
    assert load_settings(path=path, environ={"PORT": "5000"})["port"] == 5000


def test_non_numeric_port_env_ignored(tmp_path):
    """A PORT value that isn't a number is ignored."""
    result = load_settings(path=tmp_path / "none.json", environ={"PORT": "abc"})
    assert result["port"] == 3000


# ── 3. Save ──────────────────────────────────────────────────────────────────


def test_save_load_round_trip(tmp_path):
    """Settings survive a save/load round trip."""
    path = tmp_path / "settings.json"
    settings = {"host": "0.0.0.0", "port": 8000, "debug": True,
                "seed": 42, "log_level": "DEBUG"}
    save_settings(settings, path=path)
    assert load_settings(path=path, environ={}) == settings


def test_save_to_bad_path_does_not_raise(tmp_path):
    """Writing into a missing directory is silently ignored."""
    path = tmp_path / "no_dir" / "settings.json"
    save_settings(DEFAULTS, path=path)
    assert not path.exists()
