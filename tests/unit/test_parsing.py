from pathlib import Path

import pytest

from actlog.utils.parsing import InputError, load_entries


def test_load_entries_from_text_file(write_temp_text) -> None:
    path = write_temp_text("log.txt", "weight 175\n\n  ran 5k  \nslept 8 hours")
    assert load_entries(path, read_stdin=False) == ["weight 175", "ran 5k", "slept 8 hours"]


def test_load_entries_from_yaml_file(write_temp_text) -> None:
    path = write_temp_text(
        "log.yaml",
        """
- ran 5k
- text: weight 175
- 42
- note: no text key
""",
    )
    assert load_entries(path, read_stdin=False) == ["ran 5k", "weight 175"]


def test_load_entries_from_json_object(write_temp_json) -> None:
    path = write_temp_json("entry.json", {"text": "drank 64 oz water"})
    assert load_entries(path, read_stdin=False) == ["drank 64 oz water"]


def test_load_entries_invalid_json_raises(write_temp_text) -> None:
    path = write_temp_text("broken.json", "[broken")
    with pytest.raises(InputError):
        load_entries(path, read_stdin=False)


def test_load_entries_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(InputError):
        load_entries(tmp_path / "nope.txt", read_stdin=False)


def test_load_entries_stdin_json_list() -> None:
    assert load_entries(None, read_stdin=True, stdin_text='["ran 5k", "weight 175"]') == ["ran 5k", "weight 175"]


def test_load_entries_stdin_plain_lines() -> None:
    assert load_entries(None, read_stdin=True, stdin_text="ran 5k\nweight 175\n") == ["ran 5k", "weight 175"]


def test_load_entries_stdin_mapping_without_text_is_read_as_line() -> None:
    assert load_entries(None, read_stdin=True, stdin_text="weight: 175") == ["weight: 175"]


def test_load_entries_without_source_returns_empty() -> None:
    assert load_entries(None, read_stdin=False) == []
    assert load_entries(None, read_stdin=True, stdin_text="   ") == []


def test_load_entries_undecodable_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "entries.txt"
    path.write_bytes(b"ran 5k\n\xff\xfe broken\n")
    with pytest.raises(InputError):
        load_entries(path, read_stdin=False)
