import io

import pytest
from werkzeug.datastructures import FileStorage, MultiDict

from game_builder.services.upload_service import (
    check_item_counts,
    group_by_field,
    parse_json_list,
    receive_uploads,
    relocate_uploads,
)


def _file(content, filename):
    return FileStorage(stream=io.BytesIO(content), filename=filename)


def test_receive_uploads_keeps_order_within_a_field(tmp_path) -> None:
    files = MultiDict([
        ("media-question", _file(b"first", "one.png")),
        ("music", _file(b"tune", "song.mp3")),
        ("media-question", _file(b"second!", "two.gif")),
        ("bg-file", _file(b"", "")),
    ])

    uploads = receive_uploads(files, tmp_path / "staging")

    questions = [u for u in uploads if u.field_name == "media-question"]
    music = [u for u in uploads if u.field_name == "music"]

    assert len(uploads) == 3
    assert [u.extension for u in questions] == [".png", ".gif"]
    assert [u.size for u in questions] == [5, 7]
    assert questions[1].path.read_bytes() == b"second!"
    assert music[0].storage_name.endswith(".mp3")
    assert all(u.path.parent == tmp_path / "staging" for u in uploads)


def test_relocate_and_group_by_field(tmp_path) -> None:
    files = MultiDict([
        ("media-question", _file(b"a", "a.png")),
        ("media-question", _file(b"b", "b.png")),
        ("music", _file(b"m", "m.mp3")),
    ])
    uploads = receive_uploads(files, tmp_path / "staging")
    dest = tmp_path / "game"
    dest.mkdir()

    relocate_uploads(uploads, dest)
    files_map = group_by_field(uploads, lambda u: f"/games/g/{u.storage_name}")

    assert all(u.path.parent == dest and u.path.exists() for u in uploads)
    assert list((tmp_path / "staging").iterdir()) == []
    assert files_map == {
        "media-question": [f"/games/g/{uploads[0].storage_name}", f"/games/g/{uploads[1].storage_name}"],
        "music": [f"/games/g/{uploads[2].storage_name}"],
    }


def test_check_item_counts_rejects_extra_files() -> None:
    files_map = {"media-question": ["/a", "/b"], "intermediate-media": ["/c"]}

    check_item_counts(files_map, {"questions": [{}, {}, {}], "intermediates": [{}]})

    with pytest.raises(ValueError, match="media-question"):
        check_item_counts(files_map, {"questions": [{}], "intermediates": [{}]})
    with pytest.raises(ValueError, match="intermediate-media"):
        check_item_counts(files_map, {"questions": [{}, {}], "intermediates": []})


@pytest.mark.parametrize("raw", [None, ""])
def test_parse_json_list_missing_means_empty(raw) -> None:
    assert parse_json_list(raw, "questions") == []


def test_parse_json_list_errors() -> None:
    assert parse_json_list('[{"text": "hola"}]', "questions") == [{"text": "hola"}]
    with pytest.raises(ValueError, match="JSON inválido en 'questions'"):
        parse_json_list("[{", "questions")
    with pytest.raises(ValueError, match="debe ser una lista"):
        parse_json_list('{"text": "hola"}', "intermediates")
