"""Markdown building blocks for report bodies."""

from collections.abc import Iterable, Mapping
from typing import Any

NO_CONTENT_AVAILABLE = "Not available"


class UnorderedList:
    """Markdown unordered list.

    Example:
        >>> UnorderedList().add_item("do-not-merge").add_item("blocked").build()
        '* do-not-merge\\n* blocked'
    """

    def __init__(self) -> None:
        self.items: list[str] = []

    def add_item(self, item: str) -> "UnorderedList":
        self.items.append(f"* {item}")
        return self

    def build(self) -> str:
        return "\n".join(self.items)

    @classmethod
    def from_array(cls, items: Iterable[str]) -> str:
        """Render one bullet per item, verbatim."""
        bullet_list = cls()
        for item in items:
            bullet_list.add_item(item)
        return bullet_list.build()


class Table:
    """Markdown table with a single fixed width shared by every column.

    The width is the widest heading or cell in the whole table.
    """

    def __init__(self) -> None:
        self.headings: list[str] = []
        self.rows: list[list[Any]] = []

    def add_headings(self, headings: Iterable[str]) -> "Table":
        self.headings.extend(headings)
        return self

    def add_row(self, row: Iterable[Any]) -> "Table":
        self.rows.append(list(row))
        return self

    @classmethod
    def from_records(
        cls,
        records: list[Mapping[str, Any]],
        placeholder: str = NO_CONTENT_AVAILABLE,
    ) -> str:
        """Build a table from flat records; headings come from the first record.

        Args:
            records: Homogeneous key-value records
            placeholder: Text returned instead of an empty table

        Returns:
            Markdown table, or the placeholder when there are no records

        Example:
            >>> Table.from_records([{"name": "John", "age": 30}])
            '| name | age  |\\n| ---- | ---- |\\n| John | 30   |'
        """
        if not records:
            return placeholder

        table = cls()
        table.add_headings(records[0].keys())
        for record in records:
            table.add_row(record.values())
        return table.build()

    def _column_width(self) -> int:
        cells = [*self.headings, *(str(value) for row in self.rows for value in row)]
        return max((len(cell) for cell in cells), default=0)

    def build(self) -> str:
        width = self._column_width()

        headings = " | ".join(heading.ljust(width) for heading in self.headings)
        dashes = " | ".join("-" * width for _ in self.headings)
        rows = [
            "| " + " | ".join(str(value).ljust(width) for value in row) + " |"
            for row in self.rows
        ]

        return "\n".join([f"| {headings} |", f"| {dashes} |", *rows])
