"""Append-only columnar tables of row data structures.

A table stores the rows of one row class (a :class:`DataBase` subclass) as a
numpy structured array, one field per column. Rows are addressed by an
implicit row index given by their insertion order. Rows can only be appended
while the table is open; they can never be updated or deleted. Reading a row
always returns a new row object, so that nothing handed out by the table can
alter its content.
"""

import numpy as np

from aodana.utils.globals import INVAL_IDX

from .base import DataBase

__all__ = ["Table"]


class Table:
    """Append-only table of rows of a single row class.

    Attributes
    ----------
    name : str
        Name of the table in the event store
    row_class : type
        Class of the rows stored in the table
    row_key : str
        Name under which one row of this table is exposed in an entry
    parents : Dict[str, Table]
        Tables referenced by the index columns, used to validate references
    """

    def __init__(self, row_class, name=None, parents=None, capacity=64):
        """Initialize an empty, open table.

        Parameters
        ----------
        row_class : type
            Class of the rows stored in the table
        name : str, optional
            Name of the table. If not specified, the row class name is used
        parents : Dict[str, Table], optional
            Tables referenced by the index columns. If a referenced table is
            provided, appended references are checked against its length.
        capacity : int, default 64
            Initial number of rows allocated
        """
        assert isinstance(row_class, type) and issubclass(
            row_class, DataBase
        ), "The row class of a table must inherit from `DataBase`."

        self.row_class = row_class
        self.name = name or row_class.__name__
        self.row_key = self.name[:-1] if self.name.endswith("s") else self.name
        self.parents = dict(parents or {})

        self._data = np.empty(max(capacity, 1), dtype=row_class.dtype())
        self._size = 0
        self._closed = False
        self._groups = {}

    @classmethod
    def from_array(cls, row_class, array, name=None, **kwargs):
        """Builds a closed table from a structured array.

        Columns missing from the array take the default value of the
        corresponding row attribute. Fields of the array which are not
        columns of the row class are ignored.

        Parameters
        ----------
        row_class : type
            Class of the rows stored in the table
        array : np.ndarray
            Structured array with one field per column
        name : str, optional
            Name of the table
        **kwargs : dict, optional
            Additional arguments passed to the table constructor

        Returns
        -------
        Table
            Closed table which holds the content of the array
        """
        assert array.dtype.names is not None, (
            "Can only build a table from a structured array."
        )

        table = cls(row_class, name=name, capacity=len(array), **kwargs)
        default = row_class()
        for column in row_class.columns():
            if column in array.dtype.names:
                table._data[column][: len(array)] = array[column]
            else:
                table._data[column][: len(array)] = getattr(default, column)

        table._size = len(array)
        table.close()

        return table

    def __len__(self):
        """Number of rows in the table."""
        return self._size

    def __repr__(self):
        """Short description of the table."""
        state = "closed" if self._closed else "open"
        return (
            f"{self.__class__.__name__}(name={self.name!r}, "
            f"rows={self._size}, {state})"
        )

    def __iter__(self):
        """Iterates over the rows of the table, in insertion order.

        Each call starts a new pass over the rows present in the table
        at the time of the call.
        """
        for idx in range(self._size):
            yield self.row_class.from_record(self._data[idx])

    def __getitem__(self, idx):
        """Returns one row or a list of rows.

        Parameters
        ----------
        idx : Union[int, slice]
            Row index or slice of row indexes

        Returns
        -------
        Union[DataBase, List[DataBase]]
            Row object(s)
        """
        if isinstance(idx, slice):
            return [self[i] for i in range(*idx.indices(self._size))]

        idx = int(idx)
        if idx < 0:
            idx += self._size
        if idx < 0 or idx >= self._size:
            raise IndexError(
                f"Row index {idx} out of range for table `{self.name}` "
                f"with {self._size} rows."
            )

        return self.row_class.from_record(self._data[idx])

    @property
    def closed(self):
        """Whether the table still accepts new rows."""
        return self._closed

    def close(self):
        """Closes the table. Any further append is rejected."""
        self._closed = True

    def append(self, row):
        """Appends one row at the end of the table.

        Parameters
        ----------
        row : DataBase
            Row object of the class of the table

        Returns
        -------
        int
            Row index of the new row
        """
        if self._closed:
            raise RuntimeError(f"Cannot append to closed table `{self.name}`.")
        if not isinstance(row, self.row_class):
            raise TypeError(
                f"Table `{self.name}` stores `{self.row_class.__name__}` rows, "
                f"got `{type(row).__name__}`."
            )

        # Check that the references point to existing rows
        self.validate(row)

        # Make room for the new row, if needed
        if self._size == len(self._data):
            data = np.empty(2 * len(self._data), dtype=self._data.dtype)
            data[: self._size] = self._data[: self._size]
            self._data = data

        idx = self._size
        self._data[idx] = row.as_tuple()
        self._size += 1
        self._groups = {}

        return idx

    def extend(self, rows):
        """Appends several rows at the end of the table.

        Parameters
        ----------
        rows : Iterable[DataBase]
            Row objects of the class of the table

        Returns
        -------
        List[int]
            Row index of each new row
        """
        return [self.append(row) for row in rows]

    def validate(self, row):
        """Checks that the references of a row point to existing rows.

        Invalid references (-1) are allowed in generic tables: they
        represent a missing association.

        Parameters
        ----------
        row : DataBase
            Row to check
        """
        for attr, table, _ in self.references():
            value = getattr(row, attr)
            if value == INVAL_IDX:
                continue
            self.check_reference(attr, table, value)

    def check_reference(self, attr, table, value):
        """Checks that one reference is a valid row index.

        Parameters
        ----------
        attr : str
            Name of the index column
        table : str
            Name of the referenced table
        value : int
            Row index in the referenced table
        """
        upper = len(self.parents[table]) if table in self.parents else None
        if value < 0 or (upper is not None and value >= upper):
            raise IndexError(
                f"`{attr}` of table `{self.name}` refers to row {value} of "
                f"`{table}`, which does not exist."
            )

    def references(self):
        """Index columns of the table.

        Returns
        -------
        List[Tuple[str, str, str]]
            (index column, referenced table name, entry key) triplets
        """
        return [
            (attr, table, attr.removesuffix("_id"))
            for attr, table in self.row_class._index_attrs
        ]

    def column(self, name):
        """Returns a read-only view of one column.

        Parameters
        ----------
        name : str
            Column name

        Returns
        -------
        np.ndarray
            Column values, one per row
        """
        if name not in self._data.dtype.names:
            raise ValueError(
                f"Column `{name}` not in table `{self.name}`. Must be one "
                f"of {list(self._data.dtype.names)}."
            )

        view = self._data[name][: self._size]
        view.flags.writeable = False

        return view

    def to_array(self):
        """Returns a copy of the content of the table as a structured array.

        Returns
        -------
        np.ndarray
            Structured array with one element per row
        """
        return self._data[: self._size].copy()

    def rows(self, index):
        """Returns the rows at a list of row indexes.

        Parameters
        ----------
        index : np.ndarray
            Row indexes

        Returns
        -------
        List[DataBase]
            Row objects, in the order of the index
        """
        return [self.row_class.from_record(self._data[i]) for i in index]

    def group(self, attr, value):
        """Row indexes of the rows whose index column `attr` equals `value`.

        The grouping is computed once per column (stable sort), so that the
        rows of each group are returned in insertion order.

        Parameters
        ----------
        attr : str
            Index column
        value : int
            Row index in the referenced table

        Returns
        -------
        np.ndarray
            Row indexes of the group
        """
        if attr not in self._groups:
            values = self.column(attr)
            order = np.argsort(values, kind="stable")
            self._groups[attr] = (order, values[order])

        order, sorted_values = self._groups[attr]
        start = np.searchsorted(sorted_values, value, side="left")
        end = np.searchsorted(sorted_values, value, side="right")

        return order[start:end]

    def grouped(self, attr, value):
        """Rows whose index column `attr` equals `value`.

        Parameters
        ----------
        attr : str
            Index column
        value : int
            Row index in the referenced table

        Returns
        -------
        List[DataBase]
            Row objects of the group, in insertion order
        """
        return self.rows(self.group(attr, value))
