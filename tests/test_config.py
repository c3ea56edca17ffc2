import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from savestate.config import Settings
from savestate.paths import default_save_dir


def test_defaults():
    settings = Settings()
    assert settings.save_file_name == "SaveGame.sav"
    assert settings.obscure_save is True
    assert settings.format_version == 1
    assert settings.on_corrupt == "raise"
    assert settings.save_path == settings.save_dir / "SaveGame.sav"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("SAVESTATE_SAVE_DIR", str(tmp_path))
    monkeypatch.setenv("SAVESTATE_OBSCURE_SAVE", "false")
    monkeypatch.setenv("SAVESTATE_FORMAT_VERSION", "4")
    settings = Settings()
    assert settings.save_dir == tmp_path
    assert settings.obscure_save is False
    assert settings.format_version == 4


def test_linux_default_dir_follows_xdg(monkeypatch, tmp_path):
    monkeypatch.setattr("savestate.paths.platform.system", lambda: "Linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert default_save_dir() == tmp_path / "savestate"
