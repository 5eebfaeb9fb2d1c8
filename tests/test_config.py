import importlib

import pytest

import config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload config under patched env, restoring the real values afterwards."""
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


def test_blank_ids_fall_back_to_defaults(monkeypatch, reload_config):
    # what a copied .env.example leaves behind
    monkeypatch.setenv("SERVER_ID", "")
    monkeypatch.setenv("CTF_CATEGORY_ID", "")
    cfg = reload_config()
    assert cfg.SERVER_ID == 0
    assert cfg.CTF_CATEGORY_ID == 801259574317416479


def test_ids_are_read_from_env(monkeypatch, reload_config):
    monkeypatch.setenv("SERVER_ID", "1250679106899673121")
    monkeypatch.setenv("CTF_CATEGORY_ID", "42")
    cfg = reload_config()
    assert cfg.SERVER_ID == 1250679106899673121
    assert cfg.CTF_CATEGORY_ID == 42


@pytest.mark.parametrize("raw, expected", [
    ("true", True),
    ("1", True),
    ("Yes", True),
    ("false", False),
    ("", False),
])
def test_reply_to_unknown_flag(monkeypatch, reload_config, raw, expected):
    monkeypatch.setenv("REPLY_TO_UNKNOWN_INTERACTIONS", raw)
    assert reload_config().REPLY_TO_UNKNOWN_INTERACTIONS is expected
