from pathlib import Path

import streamlit as st
import streamlit.components.v1 as components

import wordsearch_engine as eng
import svg_renderer as svg


STARTER_WORDS = [
    "RECOVERY", "SUPPORT", "SAFE", "HEALTH", "CHOICE",
    "TRUST", "GOALS", "ROUTINE", "HONESTY", "HOPE",
]


def load_css(path: str | Path) -> None:
    css_path = Path(path)
    if not css_path.exists():
        return
    css = css_path.read_text(encoding="utf-8")
    st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)


st.set_page_config(page_title="Wordsearch Creator", layout="wide")
load_css(Path(__file__).with_name("styles.css"))

# Generate/Shuffle store results and rerun, so the sidebar is drawn from the new state
if "log_lines" not in st.session_state:
    st.session_state["log_lines"] = []


def _ask_regenerate() -> None:
    st.session_state["regenerate"] = True


# --- Controls in the sidebar ---
with st.sidebar:
    tab_create, tab_settings = st.tabs(["Create Puzzle", "Settings"])

    # ---------------------------
    # TAB 1: Create Puzzle
    # ---------------------------
    with tab_create:
        title = st.text_input("Title", "")
        author = st.text_input("Author", "")

        r1c1, r1c2 = st.columns(2)
        with r1c1:
            difficulty = st.selectbox(
                "Difficulty", list(eng.DIFFICULTIES), key="difficulty", on_change=_ask_regenerate,
                format_func=lambda d: f"{d.title()} ({eng.DIFFICULTIES[d]} words)",
            )
        with r1c2:
            size = st.number_input("Grid size", 6, 30, 15, format="%d")

        allow_diagonals = st.checkbox("Allow diagonal words", value=False)

        required = eng.required_word_count(difficulty)
        words_text = st.text_area(
            f"{required} words (one per line)", "\n".join(STARTER_WORDS), height=300,
        )

        b1, b2 = st.columns(2)
        with b1:
            go = st.button("Generate", key="generate", type="primary", use_container_width=True)
        with b2:
            shuffle = st.button(
                "Shuffle", key="shuffle", use_container_width=True,
                disabled=("session" not in st.session_state),
            )

    # ---------------------------
    # TAB 2: Settings
    # ---------------------------
    with tab_settings:
        st.caption("Answer key")
        show_key = st.toggle("Show answer key", value=True)
        mark_style = st.radio("Mark answers with", ["highlight", "circle"], horizontal=True)
        mark_color = st.color_picker("Mark color", "#FFE066")

        st.caption("Output formats")
        make_png = st.checkbox("Also make PNG", value=True)
        make_pdf = st.checkbox("Also make PDF", value=False)
        make_pptx = st.checkbox("Also make PPTX (simple insert)", value=False)

        st.caption("Preview")
        size_label = st.select_slider("Preview size", options=["Small", "Medium", "Large"], value="Medium")
        PREVIEW_W = {"Small": 420, "Medium": 560, "Large": 720}[size_label]


st.title("Wordsearch Creator")
form_msg = st.empty()

if go or st.session_state.pop("regenerate", False):
    words = eng.words_from_text(words_text)
    err = eng.validate_words(words, int(size), required)
    if err:
        st.session_state.pop("session", None)
        st.session_state["form_error"] = err
        st.rerun()

    settings = eng.PuzzleSettings(
        size=int(size),
        allow_diagonals=bool(allow_diagonals),
        words=tuple(words),
        title=title,
        author=author,
    )
    lines: list[str] = []
    try:
        st.session_state["session"] = eng.generate_session(settings, log=lines.append)
    except Exception as e:
        st.error("Puzzle generation failed")
        st.exception(e)
        st.stop()
    st.session_state["form_error"] = None
    st.session_state["log_lines"] = lines
    st.rerun()

elif shuffle and "session" in st.session_state:
    lines = []
    try:
        st.session_state["session"] = eng.shuffle_session(st.session_state["session"], log=lines.append)
    except Exception as e:
        st.error("Puzzle generation failed")
        st.exception(e)
        st.stop()
    st.session_state["log_lines"] = lines
    st.rerun()

if st.session_state.get("form_error"):
    form_msg.error(st.session_state["form_error"])
    st.stop()

session = st.session_state.get("session")
if session is None:
    form_msg.info("Enter your words and press Generate.")
    st.stop()

form_msg.success(eng.status_message(session))
warning = svg.failure_warning(session.result.failed)
if warning:
    st.warning(warning)

# Header follows what is typed now; the grid only changes on Generate/Shuffle
look = svg.Appearance(solution_mark_style=mark_style, solution_mark_color=mark_color)
header = svg.page_header(title, author)

try:
    puz_svg = svg.render_puzzle_svg(session.result, look, header, session.settings.words)
    sol_svg = svg.render_solution_svg(session.result, look, header, session.settings.words)
    page_svg = svg.render_page_svg(session.result, look, header, session.settings.words, show_key=show_key)
except Exception as e:
    st.error("Rendering failed")
    st.exception(e)
    st.stop()

preview, preview_h = svg.scale_svg_for_preview(page_svg, PREVIEW_W)
components.html(preview, height=preview_h + 6, scrolling=False)


# --- Print / download ---
try:
    import exporters
except Exception as e:
    st.error("Failed to import exporters.py")
    st.exception(e)
    st.stop()

export_lines: list[str] = []
c1, c2 = st.columns(2)
with c1:
    try:
        st.download_button(
            "Download PDF for printing",
            data=exporters.build_print_pdf(page_svg),
            file_name="wordsearch.pdf",
            mime="application/pdf",
        )
    except Exception as e:
        st.error("cairosvg not installed or failed to convert")
        st.exception(e)

with c2:
    try:
        data = exporters.build_zip(
            [("puzzle.svg", puz_svg), ("solution.svg", sol_svg)],
            make_png=make_png, make_pdf=make_pdf, make_pptx=make_pptx,
            log=export_lines.append,
        )
        st.download_button("Download ZIP", data=data, file_name="wordsearch.zip", mime="application/zip")
    except Exception as e:
        st.error("Failed to package outputs")
        st.exception(e)
        st.stop()

log_lines = st.session_state["log_lines"] + export_lines
if log_lines:
    with st.expander("Generation log"):
        st.code("\n".join(log_lines), language=None)
