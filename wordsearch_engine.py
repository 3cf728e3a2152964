from __future__ import annotations

import random
import re
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

# Unit steps for placement (dx, dy). x grows to the right, y grows downward.
DIR_VECTORS: Dict[str, Tuple[int, int]] = {
    "E":  (1, 0),
    "W":  (-1, 0),
    "S":  (0, 1),
    "N":  (0, -1),
    "SE": (1, 1),
    "NW": (-1, -1),
    "NE": (1, -1),
    "SW": (-1, 1),
}

ORTHOGONAL_DIRS: Tuple[str, ...] = ("E", "W", "S", "N")
DIAGONAL_DIRS: Tuple[str, ...] = ("SE", "NW", "NE", "SW")

# Random trials per word before it is reported as failed
MAX_TRIALS = 2000

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Difficulty level -> number of words the form asks for
DIFFICULTIES: Dict[str, int] = {
    "easy": 10,
    "medium": 15,
}

Coord = Tuple[int, int]  # (x, y)


# -----------------------------------------------------------------------------
# Simple logger hook
# -----------------------------------------------------------------------------
# Scripts can call set_logger(my_logger). If you do nothing, we print().
# The Streamlit app passes `log=` per call instead, since reruns share this module.
_LOGGER = None  # type: Optional[callable]


def set_logger(fn) -> None:
    """Allow the UI to inject a logger callback: fn(text: str). None resets it."""
    global _LOGGER
    _LOGGER = fn


def _log(msg: str, log=None) -> None:
    """Log to the per-call callback, else the UI hook, else print."""
    if log is not None:
        log(msg)
        return
    if _LOGGER:
        _LOGGER(msg)
        return
    print(msg)


# -----------------------------------------------------------------------------
# Data shapes used across the app
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Placement:
    """One placed word with its path in the grid."""
    word: str
    cells: Tuple[Coord, ...]  # one (x, y) per letter, in reading order
    direction: str
    start: Coord


@dataclass(frozen=True)
class GenerationResult:
    """
    The outcome of one generation call. This is what the renderer needs.
    """
    grid: Tuple[Tuple[str, ...], ...]            # grid[y][x], always A-Z
    mask: Tuple[Tuple[bool, ...], ...]           # True where a placed letter sits
    placements: Tuple[Placement, ...]            # placement order (longest first)
    failed: Tuple[str, ...]                      # words that could not be placed
    owners: Tuple[Tuple[Optional[int], ...], ...] = ()  # first placement index per cell

    @property
    def size(self) -> int:
        return len(self.grid)


# -----------------------------------------------------------------------------
# Grid building
# -----------------------------------------------------------------------------
def directions_for(allow_diagonals: bool) -> List[str]:
    """Active direction names: 4 orthogonal, plus 4 diagonal when allowed."""
    dirs = list(ORTHOGONAL_DIRS)
    if allow_diagonals:
        dirs.extend(DIAGONAL_DIRS)
    return dirs


def _empty_grid(size: int, value=None) -> List[list]:
    return [[value for _ in range(size)] for _ in range(size)]


def _start_range(step: int, length: int, size: int) -> Tuple[int, int]:
    """Inclusive start range that keeps `length` letters in bounds along one axis."""
    if step < 0:
        return length - 1, size - 1
    if step > 0:
        return 0, size - length
    return 0, size - 1


def _has_adjacent_occupied(grid, x: int, y: int) -> bool:
    """True when any of the 8 neighbours of (x, y) holds a letter."""
    size = len(grid)
    for ny in range(y - 1, y + 2):
        for nx in range(x - 1, x + 2):
            if nx == x and ny == y:
                continue
            if nx < 0 or nx >= size or ny < 0 or ny >= size:
                continue
            if grid[ny][nx] is not None:
                return True
    return False


def _can_place(grid, word: str, x: int, y: int, dx: int, dy: int) -> bool:
    """
    Check one candidate slot, cell by cell.

    A filled cell only accepts the same letter (crossing). An empty cell is
    rejected when it touches any letter already on the grid.
    """
    size = len(grid)
    for i, ch in enumerate(word):
        xx = x + dx * i
        yy = y + dy * i
        if xx < 0 or xx >= size or yy < 0 or yy >= size:
            return False

        existing = grid[yy][xx]
        if existing is not None:
            if existing != ch:
                return False
            continue

        if _has_adjacent_occupied(grid, xx, yy):
            return False
    return True


def _commit(grid, mask, owners, word: str, index: int, x: int, y: int, dx: int, dy: int) -> List[Coord]:
    """Write the word on the grid; return its (x, y) cells."""
    cells: List[Coord] = []
    for i, ch in enumerate(word):
        xx = x + dx * i
        yy = y + dy * i
        grid[yy][xx] = ch
        mask[yy][xx] = True
        # overlaps keep the first owner
        if owners[yy][xx] is None:
            owners[yy][xx] = index
        cells.append((xx, yy))
    return cells


def _rand_letter(rng) -> str:
    # Uppercase A-Z
    return ALPHABET[rng.randrange(len(ALPHABET))]


def fill_grid(grid: List[List[Optional[str]]], rng) -> None:
    """Fill empty cells in place with random uppercase letters."""
    for row in grid:
        for x, cell in enumerate(row):
            if cell is None:
                row[x] = _rand_letter(rng)


def place(
    words: Sequence[str],
    size: int,
    allow_diagonals: bool,
    rng=None,
    max_trials: int = MAX_TRIALS,
    log=None,
) -> GenerationResult:
    """
    Place every word into a fresh size x size grid, then fill the blanks.

    Words must already be cleaned by the caller: distinct, A-Z only, and
    2..size letters long. Nothing here re-validates them.

    Strategy:
      - Longest words first (stable on ties), while the grid is emptiest.
      - Per word, up to `max_trials` random (direction, start) picks.
      - A word that never fits goes to `failed`; that is not an error.

    `rng` only needs `choice` and `randrange`; a `random.Random` is created
    when none is given. `log`, when given, receives this call's log lines
    instead of the module hook.
    """
    _rng = rng if rng is not None else random.Random()
    dirs = directions_for(allow_diagonals)

    grid: List[List[Optional[str]]] = _empty_grid(size)
    mask: List[List[bool]] = _empty_grid(size, False)
    owners: List[List[Optional[int]]] = _empty_grid(size)

    ordered = sorted(words, key=len, reverse=True)
    _log(f"place: {len(ordered)} words in {size}x{size} with dirs={dirs}", log)

    placements: List[Placement] = []
    failed: List[str] = []

    for word in ordered:
        if len(word) > size:
            _log(f"place: '{word}' ({len(word)}) is longer than the grid ({size})", log)

        placed = None
        for _ in range(max_trials):
            d = _rng.choice(dirs)
            dx, dy = DIR_VECTORS[d]

            x_min, x_max = _start_range(dx, len(word), size)
            y_min, y_max = _start_range(dy, len(word), size)
            if x_min > x_max or y_min > y_max:
                continue  # no start keeps the word in bounds

            x = _rng.randrange(x_min, x_max + 1)
            y = _rng.randrange(y_min, y_max + 1)

            if _can_place(grid, word, x, y, dx, dy):
                cells = _commit(grid, mask, owners, word, len(placements), x, y, dx, dy)
                placed = Placement(word=word, cells=tuple(cells), direction=d, start=(x, y))
                break

        if placed is None:
            _log(f"place: could not place '{word}' after {max_trials} tries, skipping it", log)
            failed.append(word)
        else:
            placements.append(placed)

    fill_grid(grid, _rng)

    return GenerationResult(
        grid=tuple(tuple(row) for row in grid),
        mask=tuple(tuple(row) for row in mask),
        placements=tuple(placements),
        failed=tuple(failed),
        owners=tuple(tuple(row) for row in owners),
    )


def render_preview_ascii(result: GenerationResult) -> str:
    """
    Simple ASCII for quick debugging. Placed letters are shown, filler is '.'.
    """
    lines = []
    for row, mrow in zip(result.grid, result.mask):
        lines.append(" ".join(ch if used else "." for ch, used in zip(row, mrow)))
    return "\n".join(lines)


# -----------------------------------------------------------------------------
# Word input (UI calls these before place())
# -----------------------------------------------------------------------------
_NON_LETTERS_RE = re.compile(r"[^A-Z]")


def clean_word(text: Optional[str]) -> str:
    """Uppercase and keep A-Z only."""
    return _NON_LETTERS_RE.sub("", (text or "").upper())


def words_from_text(text: Optional[str]) -> List[str]:
    """
    One word per line. Blank lines and words with no letters are dropped;
    duplicates are removed while keeping the order the user typed.
    """
    lines = [ln.strip() for ln in re.split(r"\r?\n", text or "")]
    cleaned = [clean_word(ln) for ln in lines if ln]

    seen = set()
    unique: List[str] = []
    for w in cleaned:
        if w and w not in seen:
            seen.add(w)
            unique.append(w)
    return unique


def required_word_count(difficulty: Optional[str]) -> int:
    return DIFFICULTIES.get((difficulty or "").lower(), DIFFICULTIES["easy"])


def validate_words(words: Sequence[str], size: int, required: int) -> Optional[str]:
    """Return a message for the first problem found, or None when the list is usable."""
    if len(words) < required:
        return f"Please enter {required} words (one per line)."
    if len(words) > required:
        return f"Please enter exactly {required} words (remove extras)."

    too_long = next((w for w in words if len(w) > size), None)
    if too_long:
        return f'"{too_long}" is longer than the grid ({size}). Increase grid size or shorten the word.'

    if any(len(w) < 2 for w in words):
        return "Each word must be at least 2 letters."
    return None


# -----------------------------------------------------------------------------
# Session: settings plus last result, kept by the UI between reruns
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PuzzleSettings:
    """Everything needed to (re)generate the same puzzle."""
    size: int
    allow_diagonals: bool
    words: Tuple[str, ...]              # user order, for the printed word list
    title: str = ""
    author: str = ""


@dataclass(frozen=True)
class PuzzleSession:
    settings: PuzzleSettings
    result: GenerationResult
    shuffled: bool = False


def generate_session(settings: PuzzleSettings, rng=None, log=None) -> PuzzleSession:
    result = place(settings.words, settings.size, settings.allow_diagonals, rng=rng, log=log)
    return PuzzleSession(settings=settings, result=result)


def shuffle_session(session: PuzzleSession, rng=None, log=None) -> PuzzleSession:
    """New layout for the same inputs. The given session is left as is."""
    s = session.settings
    result = place(s.words, s.size, s.allow_diagonals, rng=rng, log=log)
    return replace(session, result=result, shuffled=True)


def status_message(session: PuzzleSession) -> str:
    verb = "Shuffled" if session.shuffled else "Generated"
    if session.result.failed:
        return f"{verb} (with issues, see warning)."
    return f"{verb}."
