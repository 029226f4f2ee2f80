"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from gobang.game.board import BOARD_SIZE, CENTER, COL_LABELS, format_point
from gobang.game.snapshot import Snapshot
from gobang.game.types import GameStatus, Point

# Layout constants
CELL_SIZE = 40
MARGIN = 36
BOARD_PX = MARGIN * 2 + CELL_SIZE * (BOARD_SIZE - 1)
STONE_RADIUS = 17
CLICK_RADIUS = 18  # Invisible click target radius

# Colors
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"
BLACK_STONE = "#1A1A1A"
WHITE_STONE = "#F5F5F5"
WHITE_STROKE = "#888"
WIN_LINE_COLOR = "#E74C3C"
BANNER_WIN = "#4ADE80"
BANNER_LOSS = "#F87171"
BANNER_NEUTRAL = "#FFFFFF"

STAR_POINTS = [CENTER, Point(3, 3), Point(3, 11), Point(11, 3), Point(11, 11)]


def _coord(point: Point) -> tuple[int, int]:
    """Convert a board point to SVG pixel coordinates (row 0 at the top)."""
    return MARGIN + point.y * CELL_SIZE, MARGIN + point.x * CELL_SIZE


def _banner(message: str) -> list[str]:
    lowered = message.lower()
    if lowered.startswith("ai"):
        color = BANNER_LOSS
    elif "win" in lowered:
        color = BANNER_WIN
    else:
        color = BANNER_NEUTRAL
    mid = BOARD_PX // 2
    return [
        f'<rect x="{mid - 110}" y="{mid - 30}" width="220" height="60" rx="10" '
        f'fill="rgba(0, 0, 0, 0.65)"/>',
        f'<text x="{mid}" y="{mid + 9}" text-anchor="middle" font-size="26" '
        f'font-family="sans-serif" font-weight="bold" fill="{color}">{message}</text>',
    ]


def render_board_svg(
    snapshot: Snapshot,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    parts: list[str] = []

    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{BOARD_PX}" height="{BOARD_PX}" '
        f'viewBox="0 0 {BOARD_PX} {BOARD_PX}" '
        f'id="gomoku-board">'
    )
    parts.append(
        f'<rect width="{BOARD_PX}" height="{BOARD_PX}" fill="{BG_COLOR}" rx="4"/>'
    )

    # Grid lines
    far = MARGIN + (BOARD_SIZE - 1) * CELL_SIZE
    for i in range(BOARD_SIZE):
        offset = MARGIN + i * CELL_SIZE
        parts.append(
            f'<line x1="{offset}" y1="{MARGIN}" x2="{offset}" y2="{far}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{offset}" x2="{far}" y2="{offset}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )

    for star in STAR_POINTS:
        cx, cy = _coord(star)
        parts.append(f'<circle cx="{cx}" cy="{cy}" r="3.5" fill="{LINE_COLOR}"/>')

    # Column labels on top, row labels on the left
    for i in range(BOARD_SIZE):
        offset = MARGIN + i * CELL_SIZE
        parts.append(
            f'<text x="{offset}" y="{MARGIN - 14}" text-anchor="middle" '
            f'font-size="13" font-family="monospace" fill="{LINE_COLOR}">'
            f'{COL_LABELS[i]}</text>'
        )
        parts.append(
            f'<text x="{MARGIN - 20}" y="{offset + 4}" text-anchor="middle" '
            f'font-size="13" font-family="monospace" fill="{LINE_COLOR}">'
            f'{i + 1}</text>'
        )

    last_point: Optional[Point] = snapshot.moves[-1].point if snapshot.moves else None
    winning = set(snapshot.winning_line or [])

    for x, row in enumerate(snapshot.board):
        for y, cell in enumerate(row):
            if cell == "empty":
                continue
            pt = Point(x, y)
            cx, cy = _coord(pt)
            is_black = cell == "black"
            fill = BLACK_STONE if is_black else WHITE_STONE
            stroke = "none" if is_black else WHITE_STROKE
            parts.append(
                f'<circle cx="{cx}" cy="{cy}" r="{STONE_RADIUS}" '
                f'fill="{fill}" stroke="{stroke}" stroke-width="1.5"/>'
            )
            if pt in winning:
                parts.append(
                    f'<circle cx="{cx}" cy="{cy}" r="{STONE_RADIUS + 2}" fill="none" '
                    f'stroke="{WIN_LINE_COLOR}" stroke-width="3" class="win-stone"/>'
                )
            elif highlight_last and pt == last_point:
                marker_color = WHITE_STONE if is_black else BLACK_STONE
                parts.append(
                    f'<circle cx="{cx}" cy="{cy}" r="5" '
                    f'fill="{marker_color}" opacity="0.7"/>'
                )

    # Clickable intersection targets (invisible circles)
    if clickable and snapshot.status is GameStatus.PLAYING:
        for x, row in enumerate(snapshot.board):
            for y, cell in enumerate(row):
                if cell != "empty":
                    continue
                pt = Point(x, y)
                cx, cy = _coord(pt)
                coord_str = format_point(pt)
                parts.append(
                    f'<circle cx="{cx}" cy="{cy}" r="{CLICK_RADIUS}" '
                    f'fill="transparent" class="board-click" '
                    f'data-coord="{coord_str}" style="cursor:pointer">'
                    f'<title>{coord_str}</title></circle>'
                )

    if game_over_message:
        parts.extend(_banner(game_over_message))

    parts.append("</svg>")
    return "\n".join(parts)


# Writes the clicked coordinate into the hidden Gradio Textbox, then presses
# the submit button.
BOARD_CLICK_JS = """
() => {
    if (window._gomokuClickBound) return;
    window._gomokuClickBound = true;

    document.addEventListener('click', function(e) {
        const circle = e.target.closest('.board-click');
        if (!circle) return;
        const coord = circle.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (container) {
            const nativeSetter = Object.getOwnPropertyDescriptor(
                window.HTMLInputElement.prototype, 'value'
            )?.set || Object.getOwnPropertyDescriptor(
                window.HTMLTextAreaElement.prototype, 'value'
            )?.set;
            if (nativeSetter) {
                nativeSetter.call(container, coord);
            } else {
                container.value = coord;
            }
            container.dispatchEvent(new Event('input', { bubbles: true }));
            const btn = document.querySelector('#coord-submit');
            if (btn) btn.click();
        }
    });
}
"""
