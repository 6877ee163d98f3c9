"""
Table layouts for composed figures.

A TableLayout is a grid of rows and columns, each sized by a Unit, with named
cells spanning rectangles of that grid. Layout operations return new layouts
so a layout can be extended step by step without touching earlier versions.
Drawing turns the rows and columns into an axes_grid1 Divider (``null`` units
become scaled sizes, the rest fixed sizes) and places each cell on it.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple
import logging

from matplotlib.axes import Axes
from matplotlib.figure import Figure
from mpl_toolkits.axes_grid1 import Size
from mpl_toolkits.axes_grid1.axes_divider import Divider

from ..base import Unit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    """A named piece of content spanning rows ``t..b`` and columns ``l..r`` (inclusive)."""
    name: str
    content: Any
    t: int
    l: int
    b: int
    r: int
    clip: bool = True
    z: float = 0.0

    @property
    def is_panel(self) -> bool:
        return getattr(self.content, 'is_panel', False)


def _shift(index: int, pos: int, n: int) -> int:
    return index + n if index >= pos else index


class TableLayout:
    """
    Rows and columns with explicit sizes plus the cells placed on them.

    ``null`` units share the space left after the fixed units; the
    ``font_size`` is used to convert ``lines`` units.
    """

    def __init__(
        self,
        heights: Sequence[Unit] = (),
        widths: Sequence[Unit] = (),
        cells: Sequence[Cell] = (),
        font_size: float = 11.0
    ):
        self.heights: Tuple[Unit, ...] = tuple(heights)
        self.widths: Tuple[Unit, ...] = tuple(widths)
        self.cells: Tuple[Cell, ...] = tuple(cells)
        self.font_size = font_size

    def __repr__(self):
        names = ", ".join(cell.name for cell in self.cells)
        return f"TableLayout({self.nrow}x{self.ncol}, cells=[{names}])"

    @property
    def nrow(self) -> int:
        return len(self.heights)

    @property
    def ncol(self) -> int:
        return len(self.widths)

    def _derive(self, heights=None, widths=None, cells=None) -> 'TableLayout':
        return TableLayout(
            heights=self.heights if heights is None else heights,
            widths=self.widths if widths is None else widths,
            cells=self.cells if cells is None else cells,
            font_size=self.font_size,
        )

    def add_rows(self, heights: Sequence[Unit], pos: Optional[int] = None) -> 'TableLayout':
        """
        Insert rows before row ``pos`` (``0`` is the top, ``None`` appends at the bottom).

        Cells below the insertion point move down; cells spanning it grow.
        """
        heights = tuple(heights)
        n = len(heights)
        pos = self.nrow if pos is None else pos
        if not 0 <= pos <= self.nrow:
            raise IndexError(f"Row position {pos} outside 0..{self.nrow}")

        cells = [
            dataclasses.replace(cell, t=_shift(cell.t, pos, n), b=_shift(cell.b, pos, n))
            for cell in self.cells
        ]
        return self._derive(heights=self.heights[:pos] + heights + self.heights[pos:], cells=cells)

    def add_cols(self, widths: Sequence[Unit], pos: Optional[int] = None) -> 'TableLayout':
        """
        Insert columns before column ``pos`` (``0`` is the left edge, ``None`` appends at the right).

        Cells right of the insertion point move right; cells spanning it grow.
        """
        widths = tuple(widths)
        n = len(widths)
        pos = self.ncol if pos is None else pos
        if not 0 <= pos <= self.ncol:
            raise IndexError(f"Column position {pos} outside 0..{self.ncol}")

        cells = [
            dataclasses.replace(cell, l=_shift(cell.l, pos, n), r=_shift(cell.r, pos, n))
            for cell in self.cells
        ]
        return self._derive(widths=self.widths[:pos] + widths + self.widths[pos:], cells=cells)

    def add_padding(self, top: Unit, right: Unit, bottom: Unit, left: Unit) -> 'TableLayout':
        """Surround the whole table with one row/column of padding on each side."""
        return (
            self.add_rows([top], pos=0)
            .add_rows([bottom])
            .add_cols([left], pos=0)
            .add_cols([right])
        )

    def add_cell(
        self,
        content: Any,
        t: int,
        l: int,
        b: Optional[int] = None,
        r: Optional[int] = None,
        name: str = 'cell',
        clip: bool = True,
        z: float = 0.0
    ) -> 'TableLayout':
        """Place ``content`` over rows ``t..b`` and columns ``l..r`` (inclusive)."""
        b = t if b is None else b
        r = l if r is None else r
        if not (0 <= t <= b < self.nrow and 0 <= l <= r < self.ncol):
            raise IndexError(
                f"Cell {name!r} span rows {t}..{b}, cols {l}..{r} outside a {self.nrow}x{self.ncol} table"
            )
        cell = Cell(name=name, content=content, t=t, l=l, b=b, r=r, clip=clip, z=z)
        return self._derive(cells=self.cells + (cell,))

    def cell(self, name: str) -> Cell:
        """Return the cell called ``name``."""
        for cell in self.cells:
            if cell.name == name:
                return cell
        raise KeyError(f"No cell named {name!r} in {self!r}")

    def has_cell(self, name: str) -> bool:
        return any(cell.name == name for cell in self.cells)

    def panels(self) -> List[Cell]:
        """Cells holding plot panels (main or marginal)."""
        return [cell for cell in self.cells if cell.is_panel]

    def _sizes(self, units: Sequence[Unit], total: float, what: str) -> list:
        """axes_grid1 sizes for ``units``: ``null`` weights scale, everything else is fixed."""
        fixed = sum(u.to_inches(self.font_size) for u in units if not u.is_null)
        share = fixed <= total
        if not share:
            logger.warning(
                f"Fixed {what} ({fixed:.2f}in) exceed the figure ({total:.2f}in); panels get no space"
            )
        return [
            Size.Scaled(unit.value if share else 0.0) if unit.is_null
            else Size.Fixed(unit.to_inches(self.font_size))
            for unit in units
        ]

    def divider(self, fig) -> Divider:
        """A Divider laying this table out over the whole of ``fig``."""
        width, height = fig.get_size_inches()
        horizontal = self._sizes(self.widths, width, 'column widths')
        # Divider rows run bottom to top
        vertical = self._sizes(self.heights, height, 'row heights')[::-1]
        return Divider(fig, (0, 0, 1, 1), horizontal, vertical, aspect=False)

    def _span(self, cell: Cell) -> dict:
        """Divider indices (end-exclusive, rows counted from the bottom) of a cell."""
        return dict(nx=cell.l, nx1=cell.r + 1, ny=self.nrow - 1 - cell.b, ny1=self.nrow - cell.t)

    def resolve(self, width: float, height: float) -> Tuple[List[float], List[float]]:
        """
        Row heights and column widths in inches for a ``width`` x ``height`` inch figure.

        Returns:
            (row_heights, col_widths)
        """
        divider = self.divider(Figure(figsize=(width, height)))
        row_heights = [
            divider.locate(0, self.nrow - 1 - row, 0, self.nrow - row).height * height
            for row in range(self.nrow)
        ]
        col_widths = [
            divider.locate(col, 0, col + 1, 0).width * width
            for col in range(self.ncol)
        ]
        return row_heights, col_widths

    def cell_rect(self, cell: Cell, width: float, height: float) -> Tuple[float, float, float, float]:
        """Rectangle ``(left, bottom, width, height)`` of a cell in figure fractions."""
        divider = self.divider(Figure(figsize=(width, height)))
        return tuple(divider.locate(**self._span(cell)).bounds)

    def draw(self, fig):
        """
        Draw every cell on ``fig`` in z order, each inside its own rectangle.

        Axes get a locator from the table's Divider, so they keep their cell
        when the figure is resized.
        """
        divider = self.divider(fig)
        for cell in sorted(self.cells, key=lambda c: c.z):
            span = self._span(cell)
            rect = tuple(divider.locate(**span).bounds)
            logger.debug(f"Drawing cell {cell.name!r} at {tuple(round(v, 3) for v in rect)}")
            artist = cell.content.draw(fig, rect, clip=cell.clip)
            if isinstance(artist, Axes):
                artist.set_axes_locator(divider.new_locator(**span))
        return fig
