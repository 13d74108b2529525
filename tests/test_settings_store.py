from __future__ import annotations

from pathlib import Path

import pytest

from strei.settings import (
    ConfigStore,
    InconsistentStateError,
    MissingKeyError,
    MissingSectionError,
    NotReadError,
    PlatformDefaults,
    DuplicateSectionError,
    Snapshot,
    serialize,
)


def _defaults() -> PlatformDefaults:
    return PlatformDefaults(initial_dir="/home/u/Music", player_dir="/opt/vlc")


def _store(home: Path) -> ConfigStore:
    return ConfigStore(home=home, defaults=_defaults)


def _store_with(home: Path, text: str) -> ConfigStore:
    store = _store(home)
    store.path().write_text(text, encoding="utf-8")
    store.read()
    return store


def test_get_before_read_fails(tmp_path: Path) -> None:
    store = _store(tmp_path)
    with pytest.raises(NotReadError):
        store.get("general", "InitialDir")
    with pytest.raises(NotReadError):
        _ = store.section_count
    with pytest.raises(NotReadError):
        _ = store.key_count


def test_set_before_read_fails(tmp_path: Path) -> None:
    store = _store(tmp_path)
    with pytest.raises(NotReadError):
        store.set("general", "InitialDir", "/x")
    assert not store.path().exists()


def test_read_creates_file_with_defaults(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()

    p = store.path()
    assert p.is_file()
    assert p.read_text(encoding="utf-8") == "[general]\nInitialDir=/home/u/Music\nVlcDir=/opt/vlc\n"
    assert store.section_count == 1
    assert store.key_count == 2
    assert store.get("general", "InitialDir") == "/home/u/Music"
    assert store.get("general", "VlcDir") == "/opt/vlc"
    # Creation never produces a backup.
    assert not store.backup_path().exists()


def test_read_missing_directory_propagates_oserror(tmp_path: Path) -> None:
    store = _store(tmp_path / "does-not-exist")
    with pytest.raises(OSError):
        store.read()
    assert store.snapshot is None


def test_get_absent_returns_none(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()
    assert store.get("nope", "InitialDir") is None
    assert store.get("general", "nope") is None


def test_get_with_parse_function(tmp_path: Path) -> None:
    store = _store_with(tmp_path, "[player]\nvolume=80\ndir=/a/b\n")
    assert store.get("player", "volume", int) == 80
    assert store.get("player", "dir", Path) == Path("/a/b")
    assert store.get("player", "missing", int) is None


def test_set_then_reload_from_disk(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()
    store.set("general", "InitialDir", "/tmp/music")

    fresh = _store(tmp_path)
    fresh.read()
    assert fresh.get("general", "InitialDir") == "/tmp/music"
    assert fresh.get("general", "VlcDir") == "/opt/vlc"


def test_same_value_twice_writes_once(tmp_path: Path, monkeypatch) -> None:
    store = _store_with(tmp_path, "[general]\nX=v0\n")

    writes = []
    original = store.write_full

    def counting(*args, **kwargs):
        writes.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(store, "write_full", counting)

    store.set("general", "X", "v1")
    before = store.snapshot
    store.set("general", "X", "v1")

    assert len(writes) == 1
    assert store.snapshot is before
    # The backup still holds the generation before the only write.
    assert store.backup_path().read_text(encoding="utf-8") == "[general]\nX=v0\n"
    assert store.path().read_text(encoding="utf-8") == "[general]\nX=v1\n"


def test_set_missing_section_or_key_leaves_everything_unchanged(tmp_path: Path) -> None:
    text = "[general]\nX=v0\n"
    store = _store_with(tmp_path, text)
    before = store.snapshot

    with pytest.raises(MissingSectionError):
        store.set("other", "X", "v1")
    with pytest.raises(MissingKeyError):
        store.set("general", "Y", "v1")

    assert store.snapshot is before
    assert store.path().read_text(encoding="utf-8") == text
    assert not store.backup_path().exists()


def test_backup_holds_previous_generation(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()

    store.set("general", "InitialDir", "/first")
    prior = store.snapshot
    store.set("general", "InitialDir", "/second")

    assert store.backup_path().read_text(encoding="utf-8") == serialize(prior)
    assert store.get("general", "InitialDir") == "/second"


def test_snapshot_held_by_reader_survives_update(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()
    held = store.snapshot

    store.set("general", "InitialDir", "/elsewhere")

    assert held["general"]["InitialDir"] == "/home/u/Music"
    assert store.snapshot is not held


def test_defer_write_updates_memory_only(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()
    on_disk = store.path().read_text(encoding="utf-8")

    store.set("general", "VlcDir", "/usr/lib/vlc", defer_write=True)

    assert store.get("general", "VlcDir") == "/usr/lib/vlc"
    assert store.path().read_text(encoding="utf-8") == on_disk
    assert not store.backup_path().exists()

    store.write_full()
    assert "VlcDir=/usr/lib/vlc" in store.path().read_text(encoding="utf-8")
    assert store.backup_path().read_text(encoding="utf-8") == on_disk


def test_file_creation_mode_creates_sections_and_keys(tmp_path: Path) -> None:
    store = _store(tmp_path)

    store.set("general", "InitialDir", "/m", defer_write=True, file_creation=True)
    store.set("ui", "Theme", "dark", defer_write=True, file_creation=True)
    store.write_full(is_creation=True)

    assert store.path().read_text(encoding="utf-8") == "[general]\nInitialDir=/m\n[ui]\nTheme=dark\n"
    store.read()
    assert store.section_count == 2
    assert store.get("ui", "Theme") == "dark"


def test_write_full_flag_must_match_file_existence(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()

    with pytest.raises(InconsistentStateError):
        store.write_full(is_creation=True)

    store.path().unlink()
    with pytest.raises(InconsistentStateError):
        store.write_full(is_creation=False)
    assert not store.path().exists()


def test_write_full_without_snapshot_fails(tmp_path: Path) -> None:
    store = _store(tmp_path)
    with pytest.raises(NotReadError):
        store.write_full(is_creation=True)


def test_write_full_replaces_existing_backup(tmp_path: Path) -> None:
    store = _store_with(tmp_path, "[general]\nX=new\n")
    store.backup_path().write_text("stale", encoding="utf-8")

    store.write_full(Snapshot.from_dict({"general": {"X": "newer"}}))

    assert store.backup_path().read_text(encoding="utf-8") == "[general]\nX=new\n"
    assert store.path().read_text(encoding="utf-8") == "[general]\nX=newer\n"


def test_failed_reload_keeps_previous_snapshot(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()
    before = store.snapshot

    store.path().write_text("[general]\nX=1\n[general]\nY=2\n", encoding="utf-8")
    with pytest.raises(DuplicateSectionError):
        store.read()

    assert store.snapshot is before


def test_value_with_line_break_is_rejected(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()
    with pytest.raises(ValueError):
        store.set("general", "InitialDir", "a\nb=c")
    assert store.get("general", "InitialDir") == "/home/u/Music"


def test_settings_default_home_is_under_user_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    store = ConfigStore()
    assert store.path() == tmp_path / ".strei" / "config.ini"
    assert store.backup_path() == tmp_path / ".strei" / "config.ini.bak"


def test_unicode_separators_in_values_survive_reload(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()

    store.set("general", "InitialDir", "/music/a\u2028[general]")
    store.set("general", "VlcDir", "/opt/x\x0bExtra=1\x85\x0c y")

    fresh = _store(tmp_path)
    fresh.read()
    assert fresh.section_count == 1
    assert fresh.key_count == 2
    assert fresh.get("general", "InitialDir") == "/music/a\u2028[general]"
    assert fresh.get("general", "VlcDir") == "/opt/x\x0bExtra=1\x85\x0c y"


def test_value_with_trailing_whitespace_is_rejected(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.read()
    for value in ("/music/dir ", "/music/dir\t", "/music/dir\u2028"):
        with pytest.raises(ValueError):
            store.set("general", "InitialDir", value)

    # Leading whitespace after '=' is kept on reload.
    store.set("general", "InitialDir", "  /music/dir")
    fresh = _store(tmp_path)
    fresh.read()
    assert fresh.get("general", "InitialDir") == "  /music/dir"


def test_failed_write_keeps_snapshot_and_leaves_backup(tmp_path: Path, monkeypatch) -> None:
    store = _store(tmp_path)
    store.read()
    store.set("general", "InitialDir", "/first")
    before = store.snapshot
    live_text = store.path().read_text(encoding="utf-8")

    def failing_write_text(self, *args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "write_text", failing_write_text)

    with pytest.raises(OSError, match="disk full"):
        store.set("general", "InitialDir", "/second")

    monkeypatch.undo()
    assert store.snapshot is before
    assert store.get("general", "InitialDir") == "/first"
    # The write stopped between the rename and the new file: the live path is
    # gone and the backup holds the last good generation.
    assert not store.path().exists()
    assert store.backup_path().read_text(encoding="utf-8") == live_text
