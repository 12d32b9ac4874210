"""Daily rotation over the master passage list."""
from hifz_tutor.models import PassageUnit

DAILY_BATCH_SIZE = 3


def rotation_indices(length: int, cursor: int, k: int = DAILY_BATCH_SIZE) -> list[int]:
    """Cyclic indices cursor, cursor+1, ... (mod length), at most `length` of them."""
    if length <= 0:
        raise ValueError("Cannot rotate over an empty passage list")
    start = cursor % length
    return [(start + i) % length for i in range(min(k, length))]


def select_todays_passages(
    passages: list[PassageUnit], cursor: int, k: int = DAILY_BATCH_SIZE,
) -> list[PassageUnit]:
    return [passages[i] for i in rotation_indices(len(passages), cursor, k)]


def next_rotation_cursor(
    master: list[PassageUnit], last_reviewed: PassageUnit, fallback: int,
) -> int:
    """Cursor for tomorrow: the position right after today's last passage.

    The lookup is against the master list as it stands now, which may differ from
    the list the session was built from. When the passage is no longer in the list,
    `fallback` is used instead.
    """
    if not master:
        return 0
    keys = [p.key for p in master]
    if last_reviewed.key in keys:
        return (keys.index(last_reviewed.key) + 1) % len(master)
    return fallback % len(master)
