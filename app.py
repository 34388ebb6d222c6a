from __future__ import annotations

from typing import List, Optional, Tuple

import pandas as pd
import streamlit as st

from sudoku_brute.driver import SolveReport, run
from sudoku_brute.engine import choices, consistent, search_space
from sudoku_brute.models import BLANK, BOX, DIGITS, SIZE, TEST_PUZZLE, Grid, count_blanks
from sudoku_brute.settings import METHODS, resolve_max_solutions, resolve_method, resolve_time_limit
from sudoku_brute.textio import grid_to_csv


def cell_key(r: int, c: int) -> str:
    return f"cell_{r}_{c}"


def reset_board() -> None:
    for r in range(SIZE):
        for c in range(SIZE):
            st.session_state[cell_key(r, c)] = ""


def load_board(grid: Grid) -> None:
    for r in range(SIZE):
        for c in range(SIZE):
            v = grid[r][c]
            st.session_state[cell_key(r, c)] = "" if v == BLANK else v


def parse_board() -> Tuple[Grid, List[str]]:
    """
    Read cell widget values from session_state and build a grid of digit rows.
    Returns (grid, errors). Empty string or '0' => blank.
    """
    errors: List[str] = []
    grid: Grid = []

    for r in range(SIZE):
        row: List[str] = []
        for c in range(SIZE):
            raw = str(st.session_state.get(cell_key(r, c), "")).strip()
            if raw in ("", BLANK):
                row.append(BLANK)
            elif len(raw) == 1 and raw in DIGITS:
                row.append(raw)
            else:
                errors.append(f"Cell ({r+1},{c+1}) must be a single digit 1..9 or blank: '{raw}'")
                row.append(BLANK)
        grid.append("".join(row))

    return grid, errors


def candidate_counts_df(grid: Grid) -> pd.DataFrame:
    cg = choices(grid)
    return pd.DataFrame(
        [[len(cs) for cs in row] for row in cg],
        index=[f"r{r+1}" for r in range(SIZE)],
        columns=[f"c{c+1}" for c in range(SIZE)],
    )


def report_df(report: SolveReport) -> pd.DataFrame:
    return pd.DataFrame([{
        "method": report.method,
        "mode": report.mode,
        "solutions": report.found,
        "search_space": f"{report.search_space:,}",
        "examined": report.examined if report.method == "brute" else None,
        "seconds": round(report.elapsed, 3),
        "timed_out": report.timed_out,
        "capped": report.truncated,
    }])


def render_board_html(grid: Grid, title: str, givens: Optional[Grid] = None) -> None:
    """
    Render a Sudoku grid with thick box borders using HTML/CSS.
    Cells that were blank in `givens` are shown in the accent colour.
    """
    html = [f"<div class='sudoku-wrap'><div class='sudoku-title'>{title}</div>"]
    html.append("<table class='sudoku'>")
    for r in range(SIZE):
        html.append("<tr>")
        for c in range(SIZE):
            v = grid[r][c]
            cls = []
            if r % BOX == 0:
                cls.append("top")
            if c % BOX == 0:
                cls.append("left")
            if (r + 1) % BOX == 0:
                cls.append("bottom")
            if (c + 1) % BOX == 0:
                cls.append("right")
            if givens is not None and givens[r][c] == BLANK:
                cls.append("filled")
            cls_attr = f" class='{' '.join(cls)}'" if cls else ""
            disp = "" if v == BLANK else v
            html.append(f"<td{cls_attr}>{disp}</td>")
        html.append("</tr>")
    html.append("</table></div>")

    st.markdown("".join(html), unsafe_allow_html=True)


st.set_page_config(page_title="Sudoku Brute", layout="wide")

st.markdown(
    """
<style>
/* Make inputs larger and centered */
div[data-testid="stTextInput"] input {
    text-align: center;
    font-size: 22px !important;
    height: 2.8rem;
    padding: 0.25rem 0.25rem;
}
div[data-testid="stTextInput"] { margin-bottom: 0rem; }

/* Sudoku HTML output */
.sudoku-wrap { margin-top: 0.5rem; }
.sudoku-title { font-size: 1.05rem; font-weight: 600; margin: 0.5rem 0 0.35rem 0; }
table.sudoku { border-collapse: collapse; }
table.sudoku td {
    width: 2.8rem;
    height: 2.8rem;
    text-align: center;
    vertical-align: middle;
    font-size: 22px;
    border: 1px solid rgba(49, 51, 63, 0.25);
}
table.sudoku td.top { border-top: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.left { border-left: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.bottom { border-bottom: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.right { border-right: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.filled { color: #1f77b4; }

.sudoku-spacer { height: 0.25rem; }
</style>
""",
    unsafe_allow_html=True,
)

st.title("Sudoku Brute")
st.caption(
    "Every blank becomes 1..9, every combination is generated, and only the valid grids are kept. "
    "Leave cells blank (or enter 0). Keep the number of blanks small for the brute method."
)

# ---- Sidebar controls ----
with st.sidebar:
    st.header("Settings")
    method = st.selectbox("Method", METHODS, index=METHODS.index(resolve_method()))
    mode = st.radio("Show", ["first", "all"], horizontal=True)
    max_solutions = st.number_input(
        "Result cap (0 = none)", min_value=0, value=resolve_max_solutions() or 0, step=1,
        disabled=mode == "first",
    )
    time_limit = st.number_input(
        "Time limit, seconds (0 = none)", min_value=0.0, value=float(resolve_time_limit() or 0.0), step=5.0,
    )

    st.divider()
    if st.button("Load example puzzle", use_container_width=True):
        load_board(TEST_PUZZLE)
    if st.button("Reset board", use_container_width=True):
        reset_board()

# ---- Input grid in a form (prevents rerun on every keystroke) ----
st.subheader("Input")

with st.form("sudoku_form", clear_on_submit=False):
    spacer_w = 0.18
    widths = []
    for g in range(BOX):
        widths.extend([1.0] * BOX)
        if g != BOX - 1:
            widths.append(spacer_w)

    for r in range(SIZE):
        cols = st.columns(widths, gap="small")
        col_idx = 0
        for c in range(SIZE):
            if c > 0 and c % BOX == 0:
                col_idx += 1  # skip spacer column
            with cols[col_idx]:
                key = cell_key(r, c)
                if key not in st.session_state:
                    st.session_state[key] = ""
                st.text_input(
                    label="",
                    key=key,
                    label_visibility="collapsed",
                    placeholder="",
                )
            col_idx += 1

        if (r + 1) % BOX == 0 and (r + 1) != SIZE:
            st.markdown("<div class='sudoku-spacer'></div>", unsafe_allow_html=True)

    colA, colB, colC = st.columns([1, 1, 2])
    validate_clicked = colA.form_submit_button("Validate", use_container_width=True)
    solve_clicked = colB.form_submit_button("Solve", use_container_width=True)

# ---- Actions ----
if validate_clicked or solve_clicked:
    grid, parse_errors = parse_board()
    if parse_errors:
        st.error("Please fix these input issues:")
        st.write("\n".join([f"- {e}" for e in parse_errors]))
    else:
        render_board_html(grid, "Current board (preview)")

        ok, msg = consistent(grid)
        if ok:
            st.success("Givens do not conflict.")
        else:
            st.warning(f"{msg} No completion can be valid.")

        space = search_space(choices(grid))
        st.write(f"**{count_blanks(grid)}** blank cells, **{space:,}** candidate grids to examine.")
        with st.expander("Candidates per cell"):
            st.dataframe(candidate_counts_df(grid), use_container_width=True)

        if solve_clicked:
            with st.spinner("Expanding..."):
                report = run(
                    grid,
                    mode=mode,
                    limit=int(max_solutions) or None,
                    time_limit=float(time_limit) or None,
                    method=method,
                )
            st.dataframe(report_df(report), use_container_width=True, hide_index=True)

            if not report.solved:
                if report.timed_out:
                    st.error("Time limit reached before any solution was found.")
                else:
                    st.error("No solution found (the puzzle may be unsolvable).")
            else:
                if report.timed_out:
                    st.warning("Time limit reached; showing the solutions found so far.")
                st.success(report.summary())
                for i, sol in enumerate(report.solutions, start=1):
                    render_board_html(sol, f"Solution {i}", givens=grid)

                st.download_button(
                    "Download first solution as CSV",
                    data=grid_to_csv(report.solutions[0]),
                    file_name="sudoku_solution.csv",
                    mime="text/csv",
                    use_container_width=False,
                )
else:
    grid, _ = parse_board()
    render_board_html(grid, "Current board (preview)")
