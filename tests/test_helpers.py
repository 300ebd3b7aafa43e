import re
import uuid

import pytest

from game_builder.utils.json_files import read_bytes, write_json
from game_builder.utils.helpers import (
    file_extension,
    generate_id,
    generate_upload_name,
    is_valid_game_id,
    parse_int_prefix,
    public_game_path,
)


def test_generate_id_is_a_uuid() -> None:
    value = generate_id()
    assert str(uuid.UUID(value)) == value
    assert generate_id() != value


def test_is_valid_game_id_rejects_paths_and_garbage() -> None:
    assert is_valid_game_id(generate_id())
    assert not is_valid_game_id("../etc")
    assert not is_valid_game_id("temp")
    assert not is_valid_game_id("")
    assert not is_valid_game_id(None)
    assert not is_valid_game_id(str(uuid.uuid4()).upper())


def test_generate_upload_name_keeps_original_extension() -> None:
    assert re.fullmatch(r"\d+-\d+\.JPG", generate_upload_name("Foto de playa.JPG"))
    assert re.fullmatch(r"\d+-\d+\.mp3", generate_upload_name("../../song.mp3"))
    assert re.fullmatch(r"\d+-\d+", generate_upload_name("README"))
    assert re.fullmatch(r"\d+-\d+\.png", generate_upload_name("图片.png"))
    assert re.fullmatch(r"\d+-\d+\.mp3", generate_upload_name("🎵.mp3"))
    assert re.fullmatch(r"\d+-\d+\.wav", generate_upload_name("C:\\music\\grito.wav"))


def test_file_extension() -> None:
    assert file_extension("clip.tar.gz") == ".gz"
    assert file_extension("") == ""
    assert file_extension(None) == ""
    assert file_extension(".bashrc") == ""
    assert file_extension("odd.p?g") == ""
    assert file_extension("canción.ogg") == ".ogg"


def test_public_game_path() -> None:
    assert public_game_path("abc", "1-2.png") == "/games/abc/1-2.png"


def test_parse_int_prefix_follows_leading_digits() -> None:
    assert parse_int_prefix("12abc") == 12
    assert parse_int_prefix("  -3") == -3
    assert parse_int_prefix("abc") == 0
    assert parse_int_prefix("") == 0
    assert parse_int_prefix(None) == 0
    assert parse_int_prefix(4) == 4
    assert parse_int_prefix(2.9) == 2
    assert parse_int_prefix(True) == 0
    assert parse_int_prefix(float("nan")) == 0


def test_parse_int_prefix_reads_hex_like_parseint() -> None:
    assert parse_int_prefix("0x1A") == 26
    assert parse_int_prefix("-0X1a") == -26
    assert parse_int_prefix("0x1G") == 1
    assert parse_int_prefix("0x") == 0
    assert parse_int_prefix("007") == 7


def test_write_json_keeps_unicode_and_read_bytes_returns_raw(tmp_path) -> None:
    path = tmp_path / "nested" / "config.json"
    write_json(path, {"title": "Búsqueda", "emojis": "🎉,🌟"})

    assert [p.name for p in path.parent.iterdir()] == ["config.json"]

    raw = read_bytes(path)
    assert raw == path.read_bytes()
    assert "Búsqueda".encode("utf-8") in raw
    assert "🎉".encode("utf-8") in raw
    assert raw.startswith(b'{\n  "title"')


def test_read_bytes_missing_file(tmp_path) -> None:
    assert read_bytes(tmp_path / "missing.json") is None
    assert read_bytes(tmp_path) is None


def test_write_json_failure_leaves_no_partial_file(tmp_path) -> None:
    path = tmp_path / "config.json"

    with pytest.raises(TypeError):
        write_json(path, {"bad": object()})

    assert list(tmp_path.iterdir()) == []
