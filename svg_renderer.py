from __future__ import annotations

import datetime as _dt
import math
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

# Import shapes for type hints only
from wordsearch_engine import GenerationResult


@dataclass
class Appearance:
    """
    Visual settings used by the SVG renderer.
    Keep this in sync with the app's Settings tab.
    """
    # Grid
    cell_bg_color: str = "#FFFFFF"
    cell_line_color: str = "#000000"
    cell_line_thickness: float = 1.0

    # Letters
    grid_font_family: str = "Arial"
    grid_font_size: int = 18
    grid_font_bold: bool = False
    grid_font_color: str = "#000000"

    # Header (title / author / date above the grid)
    show_header: bool = True
    title_font_size: int = 26
    meta_font_size: int = 14
    header_font_family: str = "Arial"

    # Word list
    list_font_family: str = "Arial"
    list_font_size: int = 14
    list_font_color: str = "#000000"
    list_align: str = "Left"  # "Left", "Center", "Right"
    list_bold: bool = False
    legend_columns: int = 2
    show_legend: bool = True

    # --- Solution marking options ---
    solution_mark_style: str = "highlight"     # "highlight" | "circle"
    solution_mark_color: str = "#FFE066"
    solution_circle_width: float = 2.0
    solution_circle_band_frac: float = 0.55    # fraction of cell height
    solution_circle_pad_len: float = 2.0       # extra length at each end (px)

    # Border
    add_border: bool = False
    border_thickness: float = 2.0
    border_color: str = "#000000"
    border_distance: float = 2.0


@dataclass(frozen=True)
class PageHeader:
    title: str
    author_line: str
    date_text: str


@dataclass(frozen=True)
class CellView:
    """One grid cell as any UI layer needs it."""
    x: int
    y: int
    letter: str
    highlighted: bool


# -----------------------------------------------------------------------------
# Display-only helpers (no SVG)
# -----------------------------------------------------------------------------
def cell_views(result: GenerationResult, show_key: bool) -> List[CellView]:
    """Row-major cell descriptors; answer cells are highlighted only with the key shown."""
    out: List[CellView] = []
    for y, (row, mrow) in enumerate(zip(result.grid, result.mask)):
        for x, (ch, used) in enumerate(zip(row, mrow)):
            out.append(CellView(x=x, y=y, letter=ch, highlighted=bool(used and show_key)))
    return out


def page_header(title: str, author: str, on: Optional[_dt.date] = None) -> PageHeader:
    """Print header text. Title falls back to 'Wordsearch'; date reads like '19 October 2026'."""
    day = on or _dt.date.today()
    title = (title or "").strip()
    author = (author or "").strip()
    return PageHeader(
        title=title or "Wordsearch",
        author_line=f"By {author}" if author else "",
        date_text=f"{day.day} {day.strftime('%B')} {day.year}",
    )


def failure_warning(failed: Sequence[str]) -> Optional[str]:
    if not failed:
        return None
    return (
        "Could not place: " + ", ".join(failed)
        + ". Try a larger grid or shorter words, then Generate again."
    )


# -----------------------------------------------------------------------------
# Tiny helper to build safe SVG text (no external lib, very basic)
# -----------------------------------------------------------------------------
def _esc(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _text_anchor(align: str) -> str:
    if align.lower().startswith("c"):
        return "middle"
    if align.lower().startswith("r"):
        return "end"
    return "start"


@dataclass(frozen=True)
class _Layout:
    cell: int
    pad: int
    grid_x: int
    grid_y: int
    grid_w: int
    grid_h: int
    header_h: int
    legend_h: int
    legend_line_h: int
    col_count: int
    total_w: int
    total_h: int


def _layout(size: int, appearance: Appearance, header: Optional[PageHeader], legend: Sequence[str]) -> _Layout:
    # Size math: cell becomes font_size * 1.6, with some padding
    cell = max(12, int(appearance.grid_font_size * 1.6))
    pad = int(cell * 0.4)
    grid_w = grid_h = size * cell

    header_h = 0
    if header is not None and appearance.show_header:
        header_h = int(appearance.title_font_size * 1.4) + int(appearance.meta_font_size * 1.4) * 2 + pad

    col_count = max(1, int(appearance.legend_columns))
    legend_line_h = max(12, int(appearance.list_font_size * 1.4))
    legend_rows = (len(legend) + col_count - 1) // col_count
    legend_h = legend_rows * legend_line_h + (pad if legend else 0)

    return _Layout(
        cell=cell,
        pad=pad,
        grid_x=pad,
        grid_y=pad + header_h,
        grid_w=grid_w,
        grid_h=grid_h,
        header_h=header_h,
        legend_h=legend_h,
        legend_line_h=legend_line_h,
        col_count=col_count,
        total_w=grid_w + pad * 2,
        total_h=header_h + grid_h + legend_h + pad * 2,
    )


def _header_parts(lay: _Layout, header: PageHeader, appearance: Appearance) -> List[str]:
    out = [f'<g font-family="{_esc(appearance.header_font_family)}" fill="{appearance.grid_font_color}">']
    y = lay.pad + int(appearance.title_font_size * 1.1)
    out.append(
        f'<text x="{lay.pad}" y="{y}" font-size="{appearance.title_font_size}" '
        f'font-weight="bold">{_esc(header.title)}</text>'
    )
    meta_h = int(appearance.meta_font_size * 1.4)
    for line in (header.author_line, header.date_text):
        y += meta_h
        if line:
            out.append(f'<text x="{lay.pad}" y="{y}" font-size="{appearance.meta_font_size}">{_esc(line)}</text>')
    out.append('</g>')
    return out


def _frame_parts(lay: _Layout, size: int, appearance: Appearance) -> Tuple[List[str], List[str]]:
    """(background + border, grid lines). Solution marks go between the two."""
    back: List[str] = []
    # Optional border (around GRID, offset by border_distance)
    if appearance.add_border:
        d = float(appearance.border_distance or 0.0)
        back.append(
            f'<rect x="{lay.grid_x - d}" y="{lay.grid_y - d}" width="{lay.grid_w + 2 * d}" '
            f'height="{lay.grid_h + 2 * d}" fill="none" stroke="{appearance.border_color}" '
            f'stroke-width="{appearance.border_thickness}" />'
        )
    back.append(
        f'<rect x="{lay.grid_x}" y="{lay.grid_y}" width="{lay.grid_w}" height="{lay.grid_h}" '
        f'fill="{appearance.cell_bg_color}" stroke="none" />'
    )

    lines: List[str] = []
    stroke = appearance.cell_line_color
    sw = appearance.cell_line_thickness
    for c in range(size + 1):
        x = lay.grid_x + c * lay.cell
        lines.append(f'<line x1="{x}" y1="{lay.grid_y}" x2="{x}" y2="{lay.grid_y + lay.grid_h}" stroke="{stroke}" stroke-width="{sw}" />')
    for r in range(size + 1):
        y = lay.grid_y + r * lay.cell
        lines.append(f'<line x1="{lay.grid_x}" y1="{y}" x2="{lay.grid_x + lay.grid_w}" y2="{y}" stroke="{stroke}" stroke-width="{sw}" />')
    return back, lines


def _letter_parts(lay: _Layout, result: GenerationResult, appearance: Appearance) -> List[str]:
    font_weight = "bold" if appearance.grid_font_bold else "normal"
    out = [
        f'<g font-family="{_esc(appearance.grid_font_family)}" font-size="{appearance.grid_font_size}" '
        f'font-weight="{font_weight}" fill="{appearance.grid_font_color}">'
    ]
    # Center letters in cells
    txt_dy = int(appearance.grid_font_size * 0.35)
    for cv in cell_views(result, show_key=False):
        x = lay.grid_x + cv.x * lay.cell + lay.cell // 2
        y = lay.grid_y + cv.y * lay.cell + lay.cell // 2 + txt_dy
        out.append(f'<text x="{x}" y="{y}" text-anchor="middle">{_esc(cv.letter)}</text>')
    out.append('</g>')
    return out


def _legend_parts(lay: _Layout, legend: Sequence[str], appearance: Appearance) -> List[str]:
    if not legend:
        return []
    lx = lay.grid_x
    ly = lay.grid_y + lay.grid_h + lay.pad
    col_w = lay.grid_w // lay.col_count
    anchor = _text_anchor(appearance.list_align)
    fw = "bold" if appearance.list_bold else "normal"

    out = [
        f'<g font-family="{_esc(appearance.list_font_family)}" font-size="{appearance.list_font_size}" '
        f'font-weight="{fw}" fill="{appearance.list_font_color}">'
    ]
    # Column-major layout
    per_col = (len(legend) + lay.col_count - 1) // lay.col_count
    for i, word in enumerate(legend):
        col_idx = i // per_col
        row_idx = i % per_col
        tx = lx + col_idx * col_w
        if anchor == "middle":
            tx += col_w // 2
        elif anchor == "end":
            tx += col_w - 4
        else:
            tx += 4
        ty = ly + (row_idx + 1) * lay.legend_line_h
        out.append(f'<text x="{tx}" y="{ty}" text-anchor="{anchor}">{_esc(word)}</text>')
    out.append('</g>')
    return out


def _highlight_parts(lay: _Layout, result: GenerationResult, appearance: Appearance) -> List[str]:
    """Per-cell soft rects behind letters."""
    out: List[str] = []
    for cv in cell_views(result, show_key=True):
        if not cv.highlighted:
            continue
        x = lay.grid_x + cv.x * lay.cell + 1
        y = lay.grid_y + cv.y * lay.cell + 1
        out.append(
            f'<rect x="{x}" y="{y}" width="{lay.cell - 2}" height="{lay.cell - 2}" '
            f'fill="{appearance.solution_mark_color}" fill-opacity="0.8" stroke="none" />'
        )
    return out


def _band_parts(lay: _Layout, result: GenerationResult, appearance: Appearance) -> List[str]:
    """
    One rotated pill per placed word with semicircular endcaps, extended to
    fully include the first and last letters (diagonals included).
    """
    cell = lay.cell
    rect_h = max(1.0, float(appearance.solution_circle_band_frac) * cell)
    r_cap = rect_h * 0.5
    sw = float(appearance.solution_circle_width)
    pad_len = float(appearance.solution_circle_pad_len)

    out: List[str] = []
    for pl in result.placements:
        (x0c, y0c), (x1c, y1c) = pl.cells[0], pl.cells[-1]
        x0 = lay.grid_x + (x0c + 0.5) * cell
        y0 = lay.grid_y + (y0c + 0.5) * cell
        x1 = lay.grid_x + (x1c + 0.5) * cell
        y1 = lay.grid_y + (y1c + 0.5) * cell

        dx, dy = x1 - x0, y1 - y0
        dist = math.hypot(dx, dy)
        ux, uy = (dx / dist, dy / dist) if dist > 1e-6 else (1.0, 0.0)

        # 0.5*cell for axis-aligned, ~0.707*cell for 45 degrees
        ext_each = 0.5 * cell * (abs(ux) + abs(uy)) + pad_len
        rect_w = dist + 2.0 * ext_each
        cx, cy = (x0 + x1) * 0.5, (y0 + y1) * 0.5
        ang = math.degrees(math.atan2(dy, dx)) if dist > 1e-6 else 0.0

        out.append(
            f'<rect x="{cx - rect_w * 0.5:.2f}" y="{cy - rect_h * 0.5:.2f}" width="{rect_w:.2f}" '
            f'height="{rect_h:.2f}" fill="none" stroke="{appearance.solution_mark_color}" '
            f'stroke-width="{sw:.2f}" rx="{r_cap:.2f}" ry="{r_cap:.2f}" '
            f'transform="rotate({ang:.2f} {cx:.2f} {cy:.2f})" />'
        )
    return out


# -----------------------------------------------------------------------------
# Core renderers
# -----------------------------------------------------------------------------
def _render(
    result: GenerationResult,
    appearance: Appearance,
    header: Optional[PageHeader],
    words: Optional[Sequence[str]],
    solution: bool,
) -> str:
    size = result.size
    legend = list(words or []) if appearance.show_legend else []
    lay = _layout(size, appearance, header, legend)

    out = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{lay.total_w}" height="{lay.total_h}" '
        f'viewBox="0 0 {lay.total_w} {lay.total_h}">'
    ]
    if lay.header_h:
        out.extend(_header_parts(lay, header, appearance))

    back, lines = _frame_parts(lay, size, appearance)
    out.extend(back)

    mark_style = (appearance.solution_mark_style or "highlight").lower()
    if solution and mark_style == "highlight":
        out.extend(_highlight_parts(lay, result, appearance))
    out.extend(lines)
    if solution and mark_style == "circle":
        out.extend(_band_parts(lay, result, appearance))

    out.extend(_letter_parts(lay, result, appearance))
    out.extend(_legend_parts(lay, legend, appearance))
    out.append('</svg>')
    return "\n".join(out)


def render_puzzle_svg(
    result: GenerationResult,
    appearance: Appearance,
    header: Optional[PageHeader] = None,
    words: Optional[Sequence[str]] = None,
) -> str:
    """
    Grid with letters, optional header above it and the word list under it.
    `words` is shown in the order given (the order the user typed them).
    """
    return _render(result, appearance, header, words, solution=False)


def render_solution_svg(
    result: GenerationResult,
    appearance: Appearance,
    header: Optional[PageHeader] = None,
    words: Optional[Sequence[str]] = None,
) -> str:
    """
    Same page as the puzzle, with answers marked either as per-cell
    highlights or as one pill band per placed word.
    """
    return _render(result, appearance, header, words, solution=True)


def render_page_svg(
    result: GenerationResult,
    appearance: Appearance,
    header: Optional[PageHeader] = None,
    words: Optional[Sequence[str]] = None,
    show_key: bool = False,
) -> str:
    if show_key:
        return render_solution_svg(result, appearance, header, words)
    return render_puzzle_svg(result, appearance, header, words)


# ---- preview helper: scale an SVG to a target pixel width (keeps aspect) ----
def scale_svg_for_preview(svg_text: str, target_width_px: int) -> Tuple[str, int]:
    """
    Returns (scaled_svg_text, new_height_px).
    Only used for the on-page preview; exported SVGs stay full size.
    """
    m = re.search(r'viewBox="0\s+0\s+([\d.]+)\s+([\d.]+)"', svg_text)
    if not m:
        return svg_text, 600
    vw, vh = float(m.group(1)), float(m.group(2))

    scale = max(0.05, float(target_width_px) / max(1.0, vw))
    new_h = max(50, int(round(vh * scale)))

    # rewrite width/height only on the <svg ...> tag
    s = re.sub(r'(<svg\b[^>]*\bwidth=")[^"]+(")', rf'\g<1>{int(target_width_px)}\g<2>', svg_text, count=1)
    s = re.sub(r'(<svg\b[^>]*\bheight=")[^"]+(")', rf'\g<1>{new_h}\g<2>', s, count=1)
    if 'preserveAspectRatio' not in s[:400]:
        s = re.sub(r'<svg\b', '<svg preserveAspectRatio="xMidYMid meet"', s, count=1)
    return s, new_h


def save_svg(svg_text: str, path: str) -> None:
    """Write an SVG string to disk."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(svg_text)
