import logging
import shutil
from pathlib import Path

from game_builder.services.game_config import assemble_config
from game_builder.services.upload_service import (
    check_item_counts,
    group_by_field,
    parse_json_list,
    receive_uploads,
    relocate_uploads,
)
from game_builder.utils.json_files import read_bytes, write_json
from game_builder.utils.helpers import generate_id, is_valid_game_id, public_game_path

logger = logging.getLogger(__name__)

CONFIG_NAME = "config.json"
ENTRY_NAME = "index.html"


def _game_dir(games_dir, game_id):
    return Path(games_dir) / game_id


def create_game(form, files, *, games_dir, upload_dir, template_file):
    """Materialize a game from a multipart request and return its entry URL.

    The uploads are staged in a directory owned by this request, moved into a
    fresh ``games_dir/<id>`` and referenced from the generated config.json.
    Either the whole game directory exists afterwards or none of it does; the
    staging directory is removed in every case.

    Raises:
        ValueError: If ``questions``/``intermediates`` is not a JSON list, or
            more item media files were sent than there are items.
        OSError: If the game directory already exists or cannot be written.
    """
    game_id = generate_id()
    game_dir = _game_dir(games_dir, game_id)
    staging_dir = Path(upload_dir) / game_id
    created = False
    uploads = []

    try:
        questions = parse_json_list(form.get("questions"), "questions")
        intermediates = parse_json_list(form.get("intermediates"), "intermediates")
        uploads = receive_uploads(files, staging_dir)

        game_dir.mkdir(parents=True, exist_ok=False)
        created = True
        relocate_uploads(uploads, game_dir)
        files_map = group_by_field(uploads, lambda u: public_game_path(game_id, u.storage_name))
        check_item_counts(files_map, {"questions": questions, "intermediates": intermediates})

        config = assemble_config(form, files_map, questions, intermediates)
        write_json(game_dir / CONFIG_NAME, config)
        shutil.copyfile(template_file, game_dir / ENTRY_NAME)
    except Exception:
        logger.exception("Error creating game %s", game_id)
        if created:
            shutil.rmtree(game_dir, ignore_errors=True)
        raise
    finally:
        shutil.rmtree(staging_dir, ignore_errors=True)

    logger.info("Created game %s with %d file(s)", game_id, len(uploads))
    return public_game_path(game_id, ENTRY_NAME)


def get_game_config(game_id, *, games_dir):
    """Return the stored config.json bytes for a game, or None if there is none."""
    if not is_valid_game_id(game_id):
        return None
    return read_bytes(_game_dir(games_dir, game_id) / CONFIG_NAME)
