"""
Text rendering of a minefield.
"""
from .field import Minefield


HORIZONTAL_PIPE = "—"
VERTICAL_PIPE = "│"


def render_field(field: Minefield) -> str:
    """
    Render the field as a bordered grid.

    Columns are labelled with the last digit of 1..size so each header
    character sits over its column; row labels are right-aligned to the
    widest row number. Each cell shows its glyph.
    """
    indices = range(field.size)
    label_width = len(str(field.size))
    columns = "".join(str((i + 1) % 10) for i in indices)
    header = " " * label_width + VERTICAL_PIPE + columns + VERTICAL_PIPE
    rule = (
        HORIZONTAL_PIPE * label_width
        + VERTICAL_PIPE
        + HORIZONTAL_PIPE * field.size
        + VERTICAL_PIPE
    )

    lines = [header, rule]
    for row in indices:
        label = str(row + 1).rjust(label_width)
        glyphs = "".join(field.get_cell(row, col).glyph for col in indices)
        lines.append(f"{label}{VERTICAL_PIPE}{glyphs}{VERTICAL_PIPE}")
    lines.append(rule)
    return "\n".join(lines)
