from __future__ import annotations

import io
import zipfile
from typing import List, Optional, Sequence, Tuple


# -----------------------------------------------------------------------------
# Simple logger hook (mirrors wordsearch_engine)
# -----------------------------------------------------------------------------
_LOGGER = None  # type: Optional[callable]


def set_logger(fn) -> None:
    """Allow a script to inject a logger callback: fn(text: str). None resets it."""
    global _LOGGER
    _LOGGER = fn


def _log(msg: str, log=None) -> None:
    if log is not None:
        log(msg)
        return
    if _LOGGER:
        _LOGGER(msg)
        return
    print(msg)


# cairosvg is imported on use so the engine and renderer work without cairo installed
def svg_to_png(svg_text: str) -> bytes:
    from cairosvg import svg2png
    return svg2png(bytestring=svg_text.encode("utf-8"))


def svg_to_pdf(svg_text: str) -> bytes:
    from cairosvg import svg2pdf
    return svg2pdf(bytestring=svg_text.encode("utf-8"))


def build_print_pdf(svg_text: str) -> bytes:
    """Single page PDF of the rendered puzzle, for printing."""
    return svg_to_pdf(svg_text)


def _pptx_bytes(images: Sequence[bytes]) -> bytes:
    """One blank slide per PNG image."""
    from pptx import Presentation
    from pptx.util import Inches

    prs = Presentation()
    blank = prs.slide_layouts[6]
    for png in images:
        slide = prs.slides.add_slide(blank)
        slide.shapes.add_picture(io.BytesIO(png), Inches(0.5), Inches(0.5), height=Inches(6.5))
    out = io.BytesIO()
    prs.save(out)
    return out.getvalue()


def build_zip(
    files: Sequence[Tuple[str, str]],
    make_png: bool = False,
    make_pdf: bool = False,
    make_pptx: bool = False,
    log=None,
) -> bytes:
    """
    Package (name, svg_text) pairs into a ZIP.

    A failed PNG/PDF conversion does not abort the package: an
    `<name>.PNG_ERROR.txt` / `<name>.PDF_ERROR.txt` entry is written instead.
    PPTX slides are built from the `puzzle_*` files only.
    """
    mem = io.BytesIO()
    images_for_pptx: List[bytes] = []
    with zipfile.ZipFile(mem, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, s in files:
            zf.writestr(name, s)

            if make_png:
                try:
                    zf.writestr(name.replace(".svg", ".png"), svg_to_png(s))
                except Exception as e:
                    _log(f"export: PNG conversion failed for {name}: {e}", log)
                    zf.writestr(name.replace(".svg", ".PNG_ERROR.txt"),
                                f"PNG conversion failed for {name}:\n{e}".encode("utf-8"))

            if make_pdf:
                try:
                    zf.writestr(name.replace(".svg", ".pdf"), svg_to_pdf(s))
                except Exception as e:
                    _log(f"export: PDF conversion failed for {name}: {e}", log)
                    zf.writestr(name.replace(".svg", ".PDF_ERROR.txt"),
                                f"PDF conversion failed for {name}:\n{e}".encode("utf-8"))

            if make_pptx and name.startswith("puzzle"):
                try:
                    images_for_pptx.append(svg_to_png(s))
                except Exception as e:
                    _log(f"export: PPTX image prep failed for {name}: {e}", log)
                    zf.writestr(name.replace(".svg", ".PPTX_IMAGE_ERROR.txt"),
                                f"PPTX image prep failed for {name}:\n{e}".encode("utf-8"))

        if make_pptx and images_for_pptx:
            zf.writestr("puzzle.pptx", _pptx_bytes(images_for_pptx))

    return mem.getvalue()
