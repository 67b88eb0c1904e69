"""
List View Module

A list view that pulls its rows from a data source. The data source
only has to answer two questions: how many rows, and what text is in
row i.
"""

import logging
from typing import Dict, List, Optional, Type


logger = logging.getLogger(__name__)


class ListDataSource:
    """Contract a list view's data source has to fulfil."""

    def row_count(self) -> int:
        raise NotImplementedError

    def row_text(self, index: int) -> str:
        raise NotImplementedError

    def cell_for_row(self, list_view: "ListView", index: int) -> "Cell":
        raise NotImplementedError


class Cell:
    """Generic reusable row cell with a single text label."""

    def __init__(self, reuse_identifier: str):
        self.reuse_identifier = reuse_identifier
        self.text: Optional[str] = None

    def prepare_for_reuse(self) -> None:
        self.text = None


class ListView:
    """
    List of fungible rows identified only by position.

    Cells are pooled per reuse identifier and handed out again on
    every reload.
    """

    def __init__(self, data_source: Optional[ListDataSource] = None):
        self.data_source = data_source
        self.reload_count = 0
        self._cell_classes: Dict[str, Type[Cell]] = {}
        self._pool: Dict[str, List[Cell]] = {}
        self._rows: List[Cell] = []

    def register(self, reuse_identifier: str, cell_cls: Type[Cell] = Cell) -> None:
        """Register the cell class handed out for a reuse identifier."""
        self._cell_classes[reuse_identifier] = cell_cls
        self._pool.setdefault(reuse_identifier, [])

    def dequeue_reusable_cell(self, reuse_identifier: str, index: int) -> Cell:
        """
        Get a cell for the row at index, recycling a pooled one if possible.

        Raises:
            KeyError: If no cell class is registered for the identifier.
        """
        if reuse_identifier not in self._cell_classes:
            raise KeyError(f"No cell registered for reuse identifier '{reuse_identifier}'")

        pool = self._pool[reuse_identifier]
        if pool:
            cell = pool.pop()
            cell.prepare_for_reuse()
        else:
            cell = self._cell_classes[reuse_identifier](reuse_identifier)

        return cell

    def number_of_rows(self) -> int:
        if self.data_source is None:
            return 0
        return self.data_source.row_count()

    def reload_data(self) -> None:
        """Rebuild every row from the data source."""
        for cell in self._rows:
            self._pool.setdefault(cell.reuse_identifier, []).append(cell)
        self._rows = []

        for index in range(self.number_of_rows()):
            self._rows.append(self.data_source.cell_for_row(self, index))

        self.reload_count += 1
        logger.debug(f"List reloaded with {len(self._rows)} row(s)")

    def visible_rows(self) -> List[str]:
        """Text of every row as of the last reload."""
        return [cell.text or "" for cell in self._rows]
