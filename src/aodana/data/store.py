"""Module with the container of all the tables of one processing pass."""

from .table import Table

__all__ = ["EventStore"]


class EventStore(dict):
    """Dictionary of the tables produced or read in one processing pass.

    Each processing pass works on its own store: nothing is carried over
    from one pass to the next.

    Attributes
    ----------
    index : int
        Index of the processing pass
    source : str
        Path to the file the tables were read from, if any
    """

    def __init__(self, tables=(), index=0, source=None):
        """Initialize the store.

        Parameters
        ----------
        tables : Iterable[Table], optional
            Tables to add to the store
        index : int, default 0
            Index of the processing pass
        source : str, optional
            Path to the file the tables were read from
        """
        super().__init__()
        self.index = index
        self.source = source
        for table in tables:
            self.add(table)

    def add(self, table):
        """Adds one table to the store, under its name.

        Parameters
        ----------
        table : Table
            Table to add
        """
        assert isinstance(table, Table), "Can only store `Table` objects."
        if table.name in self:
            raise ValueError(
                f"A table named `{table.name}` already exists in this pass."
            )

        self[table.name] = table

    def require(self, keys):
        """Checks that a set of tables is present in the store.

        Parameters
        ----------
        keys : Iterable[str]
            Names of the required tables
        """
        missing = [k for k in keys if k not in self]
        if missing:
            raise KeyError(
                f"Missing required table(s) {missing} in processing pass "
                f"{self.index}. Available: {list(self.keys())}."
            )

    def children(self, name):
        """Tables which refer to a given table through an index column.

        Parameters
        ----------
        name : str
            Name of the referenced table

        Returns
        -------
        List[Tuple[Table, str]]
            (child table, index column) pairs
        """
        children = []
        for table in self.values():
            for attr, parent, _ in table.references():
                if parent == name:
                    children.append((table, attr))

        return children

    def iterate(self, name):
        """Iterates over the rows of one table, with their relations.

        Each entry is a dictionary which contains:
        - `index`: row index of the row
        - `<row_key>`: the row itself (e.g. `collision`)
        - one key per valid reference of the row to another table present
          in the store (e.g. `bc`, `mc_collision`), holding that row
        - one key per table which refers to this one (e.g. `tracks`), holding
          the list of rows of that table which refer to this row

        Parameters
        ----------
        name : str
            Name of the table to iterate over

        Yields
        ------
        dict
            One entry per row of the table, in insertion order
        """
        self.require([name])
        table = self[name]
        children = self.children(name)
        for idx, row in enumerate(table):
            entry = {"index": idx, table.row_key: row}
            for key, (parent, ref) in row.index_refs().items():
                if parent in self:
                    entry[key] = self[parent][ref]
            for child, attr in children:
                entry[child.name] = child.grouped(attr, idx)

            yield entry
