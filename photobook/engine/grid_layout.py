"""
grid_layout.py — Grid computation for template slots.

Grid templates are not hand-authored cell by cell. They are generated from
a row/column formula over a fixed cell size and stride, so every grid arity
comes out visually even:

    x = margin_x + col * col_stride
    y = margin_y + row * row_stride

All outputs are in NORMALIZED page coordinates (0-1).
"""

from dataclasses import dataclass
from typing import List


# =============================================================================
# GRID COMPUTATION RESULTS
# =============================================================================

@dataclass(frozen=True)
class GridCell:
    """A single cell in the grid with its computed position."""
    row: int
    col: int
    x: float
    y: float
    width: float
    height: float

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class GridSpec:
    """Parameters for a normalized grid."""
    rows: int
    cols: int
    margin_x: float
    margin_y: float
    cell_width: float
    cell_height: float
    col_stride: float
    row_stride: float

    @property
    def gutter_h(self) -> float:
        """Horizontal gap between neighbouring cells."""
        return self.col_stride - self.cell_width

    @property
    def gutter_v(self) -> float:
        """Vertical gap between neighbouring rows."""
        return self.row_stride - self.cell_height


@dataclass
class GridLayout:
    """Result of compute_grid() with all cell positions."""
    cells: List[GridCell]
    num_rows: int
    num_cols: int


# =============================================================================
# GRID COMPUTATION
# =============================================================================

def compute_grid(spec: GridSpec) -> GridLayout:
    """
    Compute cell positions for a grid, row-major (left-to-right, top-to-bottom).

    Args:
        spec: Grid parameters in normalized coordinates

    Returns:
        GridLayout with rows * cols cells
    """
    cells = []
    for i in range(spec.rows * spec.cols):
        row = i // spec.cols
        col = i % spec.cols
        cells.append(GridCell(
            row=row,
            col=col,
            x=round(spec.margin_x + col * spec.col_stride, 6),
            y=round(spec.margin_y + row * spec.row_stride, 6),
            width=spec.cell_width,
            height=spec.cell_height,
        ))

    return GridLayout(cells=cells, num_rows=spec.rows, num_cols=spec.cols)


def uniform_grid_spec(rows: int, cols: int, margin: float, gutter: float) -> GridSpec:
    """
    Build a GridSpec that fills the page evenly with square-stride cells.

    The cell size is whatever remains after the outer margins and the
    gutters between cells, so margin + cells + gutters == 1 on both axes.
    """
    cell_width = (1 - 2 * margin - gutter * (cols - 1)) / cols
    cell_height = (1 - 2 * margin - gutter * (rows - 1)) / rows
    return GridSpec(
        rows=rows,
        cols=cols,
        margin_x=margin,
        margin_y=margin,
        cell_width=round(cell_width, 6),
        cell_height=round(cell_height, 6),
        col_stride=round(cell_width + gutter, 6),
        row_stride=round(cell_height + gutter, 6),
    )
