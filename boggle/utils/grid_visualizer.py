from typing import Iterable, List

from ..environment.models import RoundState
from ..verifiers.models import Grid, Position


def render_grid(grid: Grid, selection: Iterable[Position] = ()) -> str:
    """Render the board to a string grid, bracketing selected tiles."""
    selected = {Position(*pos) for pos in selection}
    lines = []
    for r, row in enumerate(grid.cells):
        cells = []
        for c, letter in enumerate(row):
            if (r, c) in selected:
                cells.append(f"[{letter.upper()}]")
            else:
                cells.append(f" {letter.upper()} ")
        lines.append(''.join(cells))
    return '\n'.join(lines)


def render_state(state: RoundState, selection: Iterable[Position] = ()) -> str:
    """Render everything the player needs to see between submissions."""
    lines: List[str] = []
    if state.grid is not None:
        lines.append(render_grid(state.grid, selection))
        lines.append('')

    minutes, seconds = divmod(state.time_remaining, 60)
    lines.append(f"Time: {minutes}:{seconds:02d}   Score: {state.score}   High score: {state.high_score}")

    if state.found_words:
        lines.append(f"Found ({len(state.found_words)}): {', '.join(state.found_words)}")
    else:
        lines.append("Found: (none)")

    if state.last_message:
        lines.append(f"! {state.last_message}")

    return '\n'.join(lines)
