import datetime
import random

import pytest

import svg_renderer as svg
import wordsearch_engine as eng


WORDS = ["ZEBRA", "APPLE", "MANGO"]


@pytest.fixture
def result():
    return eng.place(WORDS, 9, True, rng=random.Random(7))


def test_cell_views_follow_mask_only_with_key(result):
    hidden = svg.cell_views(result, show_key=False)
    shown = svg.cell_views(result, show_key=True)

    assert len(hidden) == len(shown) == 81
    assert not any(cv.highlighted for cv in hidden)
    assert [(cv.x, cv.y) for cv in shown[:3]] == [(0, 0), (1, 0), (2, 0)]
    for cv in shown:
        assert cv.letter == result.grid[cv.y][cv.x]
        assert cv.highlighted == result.mask[cv.y][cv.x]


def test_page_header():
    day = datetime.date(2026, 10, 19)
    assert svg.page_header("", "", on=day) == svg.PageHeader("Wordsearch", "", "19 October 2026")
    h = svg.page_header("  Fruit  ", " Sam ", on=datetime.date(2026, 3, 5))
    assert (h.title, h.author_line, h.date_text) == ("Fruit", "By Sam", "5 March 2026")


def test_failure_warning():
    assert svg.failure_warning(()) is None
    assert svg.failure_warning(["CAT", "DOG"]) == (
        "Could not place: CAT, DOG. Try a larger grid or shorter words, then Generate again."
    )


def test_render_is_repeatable(result):
    look = svg.Appearance()
    header = svg.page_header("Fruit", "Sam", on=datetime.date(2026, 1, 1))
    first = svg.render_solution_svg(result, look, header, WORDS)
    assert first == svg.render_solution_svg(result, look, header, WORDS)
    assert svg.render_puzzle_svg(result, look) == svg.render_puzzle_svg(result, look)


def test_highlight_marks_every_mask_cell(result):
    look = svg.Appearance(solution_mark_color="#ABCDEF")
    marked = 'fill="#ABCDEF" fill-opacity'
    cells = sum(sum(row) for row in result.mask)

    assert svg.render_solution_svg(result, look).count(marked) == cells
    assert marked not in svg.render_puzzle_svg(result, look)


def test_circle_style_draws_one_band_per_word(result):
    look = svg.Appearance(solution_mark_style="circle", solution_mark_color="#ABCDEF")
    out = svg.render_solution_svg(result, look)
    assert out.count('stroke="#ABCDEF"') == len(result.placements)
    assert "fill-opacity" not in out


def test_word_list_keeps_given_order(result):
    out = svg.render_puzzle_svg(result, svg.Appearance(), words=WORDS)
    assert out.index(">ZEBRA<") < out.index(">APPLE<") < out.index(">MANGO<")

    no_list = svg.render_puzzle_svg(result, svg.Appearance(show_legend=False), words=WORDS)
    assert ">ZEBRA<" not in no_list


def test_header_text_is_escaped(result):
    header = svg.page_header("Tom & Jerry", "<me>", on=datetime.date(2026, 1, 1))
    out = svg.render_puzzle_svg(result, svg.Appearance(), header)
    assert "Tom &amp; Jerry" in out
    assert "By &lt;me&gt;" in out
    assert "1 January 2026" in out


def test_render_page_svg_switches_on_key(result):
    look = svg.Appearance()
    assert svg.render_page_svg(result, look, show_key=True) == svg.render_solution_svg(result, look)
    assert svg.render_page_svg(result, look, show_key=False) == svg.render_puzzle_svg(result, look)


def test_letters_are_drawn(result):
    out = svg.render_puzzle_svg(result, svg.Appearance())
    assert out.startswith("<svg ") and out.endswith("</svg>")
    assert out.count('text-anchor="middle">') == 81


def test_scale_svg_for_preview(result):
    out, h = svg.scale_svg_for_preview(svg.render_puzzle_svg(result, svg.Appearance()), 300)
    assert 'width="300"' in out
    assert f'height="{h}"' in out
    assert 'preserveAspectRatio="xMidYMid meet"' in out


def test_save_svg(tmp_path, result):
    path = tmp_path / "puzzle.svg"
    text = svg.render_puzzle_svg(result, svg.Appearance())
    svg.save_svg(text, str(path))
    assert path.read_text(encoding="utf-8") == text
