import re
from typing import Literal, get_args

from app.core.errors import InvalidInputError
from app.models.movie import MovieRecord

HintType = Literal["decade", "first_letter", "poster_crop", "one_actor", "tagline"]
HINT_TYPES: tuple[str, ...] = get_args(HintType)

# the web client sends camelCase hint names
_HINT_ALIASES = {
    "firstLetter": "first_letter",
    "posterCrop": "poster_crop",
    "oneActor": "one_actor",
}
_LEADING_ARTICLE_RE = re.compile(r"^(the|a|an)\s+", re.IGNORECASE)
NO_TAGLINE = "No tagline available."


def parse_hint_type(value: str) -> str:
    hint_type = _HINT_ALIASES.get(value, value)
    if hint_type not in HINT_TYPES:
        raise InvalidInputError("Invalid hint type", details={"hint_type": value, "allowed": list(HINT_TYPES)})
    return hint_type


def derive_hint(target: MovieRecord, hint_type: str, poster_base_url: str) -> str:
    kind = parse_hint_type(hint_type)

    if kind == "decade":
        return f"{target.year // 10 * 10}s"
    if kind == "first_letter":
        stripped = _LEADING_ARTICLE_RE.sub("", target.title, count=1)
        return stripped[:1].upper()
    if kind == "poster_crop":
        # client renders a cropped, blurred version
        return f"{poster_base_url}{target.poster_path}" if target.poster_path else ""
    if kind == "one_actor":
        if not target.actors:
            return "Unknown"
        return target.actors[len(target.actors) // 2] or target.actors[0] or "Unknown"
    return target.tagline or NO_TAGLINE
