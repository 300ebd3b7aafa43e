"""Builds the config.json document a game's page reads at play-time.

Everything here is a pure function of the submitted form, the uploaded file
paths grouped by field, and the parsed question / intermediate lists. Values
are passed through unchecked; a missing or empty text field falls back to a
literal default.
"""

from game_builder.utils.helpers import parse_int_prefix

TEXT_DEFAULTS = {
    "game-title": "Búsqueda del Tesoro",
    "max-attempts": 3,
    "particle-color": "#ffd700",
    "msg-correct": "¡Correcto!",
    "anim-correct": "confetti",
    "emoji-correct": "🎉,🌟,💫",
    "msg-wrong": "¡Incorrecto! Intenta de nuevo",
    "anim-wrong": "shake",
    "emoji-wrong": "💥,😢,❌",
    "msg-win": "¡Felicidades! Has ganado",
    "anim-win": "confetti",
    "emoji-win": "🏆,🎊,🥳",
    "msg-lose": "¡Has perdido! Intenta de nuevo",
    "anim-lose": "shake",
    "emoji-lose": "💔,😢,☠️",
}

# Outcome blocks, in document order.
OUTCOMES = ("correct", "wrong", "win", "lose")


def _text(form, field):
    value = form.get(field)
    if value is None or value == "":
        return TEXT_DEFAULTS.get(field)
    return value


def _first(files_map, field):
    paths = files_map.get(field)
    return paths[0] if paths else None


def _at(paths, idx):
    return paths[idx] if idx < len(paths) else None


def _get(item, key):
    return item.get(key) if isinstance(item, dict) else None


def build_questions(items, media):
    return [
        {
            "text": _get(q, "text"),
            "options": _get(q, "options"),
            "correct": _get(q, "correct"),
            "media": _at(media, idx),
        }
        for idx, q in enumerate(items)
    ]


def build_intermediates(items, media):
    return [
        {
            "text": _get(i, "text"),
            "insertAt": parse_int_prefix(_get(i, "insertAt")),
            "media": _at(media, idx),
        }
        for idx, i in enumerate(items)
    ]


def assemble_config(form, files_map, questions, intermediates):
    """Return the configuration document for one game.

    Args:
        form: Mapping of text fields (request.form or a plain dict).
        files_map: Field name -> ordered public paths of the files sent under it.
        questions: Parsed ``questions`` list.
        intermediates: Parsed ``intermediates`` list.
    """
    config = {
        "title": _text(form, "game-title"),
        "bgColor": form.get("bg-color"),
        "bgType": form.get("bg-type"),
        "textColor": form.get("text-color"),
        "btnColor": form.get("btn-color"),
        "music": _first(files_map, "music"),
        "soundSelect": _first(files_map, "sound-select"),
        "soundCorrect": _first(files_map, "sound-correct"),
        "soundWrong": _first(files_map, "sound-wrong"),
        "bgFile": _first(files_map, "bg-file"),
        "questions": build_questions(questions, files_map.get("media-question", [])),
        "intermediates": build_intermediates(intermediates, files_map.get("intermediate-media", [])),
        "maxAttempts": _text(form, "max-attempts"),
        "particleColor": _text(form, "particle-color"),
    }
    for outcome in OUTCOMES:
        config[f"{outcome}Message"] = _text(form, f"msg-{outcome}")
        config[f"{outcome}Media"] = _first(files_map, f"media-{outcome}")
        config[f"{outcome}Audio"] = _first(files_map, f"audio-{outcome}")
        config[f"{outcome}Anim"] = _text(form, f"anim-{outcome}")
        config[f"{outcome}Emojis"] = _text(form, f"emoji-{outcome}")
    return config
