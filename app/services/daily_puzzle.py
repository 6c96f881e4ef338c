import logging
from datetime import date, datetime, timezone

from app.core.errors import InvalidInputError
from app.models.movie import MovieRecord
from app.services.catalog import MovieCatalog

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS_PER_DAY = 5
DEFAULT_LAUNCH_DATE = date(2026, 2, 11)

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def hash_string(value: str) -> int:
    """Polynomial rolling hash (h * 31 + code) kept in signed 32-bit range, returned as abs."""
    h = 0
    for ch in value:
        h = (h * 31 + ord(ch)) & _INT32_MASK
        if h & _INT32_SIGN:
            h -= _INT32_MASK + 1
    return abs(h)


def today_string(now: datetime | None = None) -> str:
    current = now or datetime.now(timezone.utc)
    return current.astimezone(timezone.utc).date().isoformat()


def parse_date_key(value: str) -> date:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise InvalidInputError("date must be formatted as YYYY-MM-DD", details={"date": value}) from exc


def normalize_date_key(value: str | None) -> str:
    if value is None:
        return today_string()
    return parse_date_key(value).isoformat()


def get_puzzle_number(date_key: str, launch_date: date = DEFAULT_LAUNCH_DATE) -> int:
    elapsed_days = (parse_date_key(date_key) - launch_date).days
    return max(1, elapsed_days + 1)


def _probe(start: int, used: set[int], catalog_size: int) -> int:
    index = start
    for _ in range(catalog_size):
        if index not in used:
            return index
        index = (index + 1) % catalog_size
    # every slot taken (more rounds than movies): reuse the hashed slot
    return start


def select_target_index(date_key: str, round_number: int, catalog_size: int) -> int:
    """Pick the catalog index for one round of one day.

    Earlier rounds of the same day are recomputed (never stored) so that every round in
    a day lands on a distinct movie as long as the catalog has at least as many entries
    as there are rounds.
    """
    if catalog_size <= 0:
        raise InvalidInputError("catalog is empty", details={"catalog_size": catalog_size})
    if round_number < 0:
        raise InvalidInputError("round must be zero or positive", details={"round": round_number})

    used: set[int] = set()
    for previous in range(round_number):
        idx = _probe(hash_string(f"{date_key}-{previous}") % catalog_size, used, catalog_size)
        used.add(idx)

    return _probe(hash_string(f"{date_key}-{round_number}") % catalog_size, used, catalog_size)


class DailySelector:
    def __init__(
        self,
        catalog: MovieCatalog,
        rounds_per_day: int = DEFAULT_ROUNDS_PER_DAY,
        launch_date: date = DEFAULT_LAUNCH_DATE,
    ):
        self.catalog = catalog
        self.rounds_per_day = rounds_per_day
        self.launch_date = launch_date

    def puzzle_number(self, date_key: str) -> int:
        return get_puzzle_number(date_key, self.launch_date)

    def target_index(self, date_key: str, round_number: int = 0) -> int:
        if not 0 <= round_number < self.rounds_per_day:
            raise InvalidInputError(
                "round is out of range",
                details={"round": round_number, "rounds_per_day": self.rounds_per_day},
            )
        return select_target_index(normalize_date_key(date_key), round_number, len(self.catalog))

    def get_target(self, date_key: str, round_number: int = 0) -> MovieRecord:
        index = self.target_index(date_key, round_number)
        logger.debug("Daily target selected", extra={"date": date_key, "round": round_number, "index": index})
        return self.catalog[index]
