import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from game_builder.utils.helpers import file_extension, generate_upload_name

logger = logging.getLogger(__name__)

# File fields whose uploads line up, by position, with a JSON list field.
ITEM_MEDIA_FIELDS = {
    "media-question": "questions",
    "intermediate-media": "intermediates",
}


@dataclass
class UploadedFile:
    field_name: str
    storage_name: str
    extension: str
    size: int
    path: Path


def receive_uploads(files, upload_dir):
    """Save every file part of a request under upload_dir.

    ``files`` is the request's multi-dict of FileStorage parts. Files sent
    under the same field keep their arrival order, which is the only link
    between a file and the item it belongs to.
    Parts without a filename ("no file chosen") are skipped.
    """
    upload_dir = Path(upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    received = []
    for field_name, storage in files.items(multi=True):
        if not storage or not storage.filename:
            continue
        storage_name = generate_upload_name(storage.filename)
        dest = upload_dir / storage_name
        storage.save(dest)
        received.append(UploadedFile(
            field_name=field_name,
            storage_name=storage_name,
            extension=file_extension(storage.filename),
            size=dest.stat().st_size,
            path=dest,
        ))
    logger.debug("Received %d upload(s) into %s", len(received), upload_dir)
    return received


def relocate_uploads(uploads, dest_dir):
    """Move received files into dest_dir, updating each record's path."""
    dest_dir = Path(dest_dir)
    for upload in uploads:
        target = dest_dir / upload.storage_name
        shutil.move(str(upload.path), str(target))
        upload.path = target
    return uploads


def group_by_field(uploads, url_for_file):
    """Map field name -> ordered list of document paths for the files sent under it."""
    files_map = {}
    for upload in uploads:
        files_map.setdefault(upload.field_name, []).append(url_for_file(upload))
    return files_map


def check_item_counts(files_map, items_by_field):
    """Reject requests that carry more item media files than there are items.

    ``items_by_field`` maps a list field name ("questions") to its parsed items.
    """
    for media_field, list_field in ITEM_MEDIA_FIELDS.items():
        files = files_map.get(media_field, [])
        items = items_by_field.get(list_field, [])
        if len(files) > len(items):
            raise ValueError(
                f"se recibieron {len(files)} archivos en '{media_field}' "
                f"pero solo hay {len(items)} elementos en '{list_field}'"
            )


def parse_json_list(raw, field_name):
    """Parse a JSON-encoded list form field; missing or empty means []."""
    if raw is None or raw == "":
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON inválido en '{field_name}': {e}") from e
    if not isinstance(value, list):
        raise ValueError(f"'{field_name}' debe ser una lista JSON")
    return value
