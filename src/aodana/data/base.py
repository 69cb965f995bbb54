"""Module with a parent class of all table row data structures."""

from dataclasses import asdict, dataclass, fields
from enum import IntEnum

import numpy as np

from aodana.utils.globals import INVAL_IDX


@dataclass(eq=False)
class DataBase:
    """Base class of all table row data structures.

    Each attribute of a row is one column of the table it is stored in. The
    column type is derived from the attribute annotation:
    - `bool` is stored as a numpy boolean
    - `int` is stored as a 32-bit integer (64-bit for index columns)
    - `float` is stored as a 64-bit float
    - enumerated types (`IntEnum`) are stored as 8-bit integers
    """

    # Index attributes as (attribute, referenced table name) pairs
    _index_attrs = ()

    # Attributes that must never be stored to file
    _skip_attrs = ()

    # Column types which differ from the default derived from annotations
    _dtypes = ()

    def __eq__(self, other):
        """Checks that all attributes of two rows are the same.

        Parameters
        ----------
        other : obj
            Other instance of the same row class

        Returns
        -------
        bool
            `True` if all attributes of both rows are identical
        """
        if self.__class__ != other.__class__:
            return False

        return all(getattr(other, k) == v for k, v in self.__dict__.items())

    @classmethod
    def columns(cls):
        """Names of the columns of a table of this row class, in order.

        Returns
        -------
        List[str]
            List of column names
        """
        return [f.name for f in fields(cls) if f.name not in cls._skip_attrs]

    @classmethod
    def dtype(cls):
        """Numpy structured data type of a table of this row class.

        Returns
        -------
        np.dtype
            Structured data type with one field per column
        """
        overrides = dict(cls._dtypes)
        index_attrs = dict(cls._index_attrs)
        descr = []
        for f in fields(cls):
            if f.name in cls._skip_attrs:
                continue
            if f.name in overrides:
                dtype = overrides[f.name]
            elif f.name in index_attrs:
                dtype = np.int64
            elif isinstance(f.type, type) and issubclass(f.type, IntEnum):
                dtype = np.int8
            elif f.type is bool:
                dtype = np.bool_
            elif f.type is int:
                dtype = np.int32
            elif f.type is float:
                dtype = np.float64
            else:
                raise TypeError(
                    f"Cannot store attribute `{f.name}` of type {f.type} "
                    f"of `{cls.__name__}` in a table column."
                )
            descr.append((f.name, dtype))

        return np.dtype(descr)

    @classmethod
    def from_record(cls, record):
        """Builds a row object from a numpy structured record.

        Numpy scalars are cast back to their annotated python type.

        Parameters
        ----------
        record : np.void
            One element of a structured array of `dtype()` type

        Returns
        -------
        DataBase
            Row object
        """
        kwargs = {}
        for f in fields(cls):
            if f.name in cls._skip_attrs:
                continue
            kwargs[f.name] = f.type(record[f.name].item())

        return cls(**kwargs)

    def as_tuple(self):
        """Returns the column values of the row as a tuple.

        Returns
        -------
        tuple
            Values in the order of `columns()`
        """
        return tuple(getattr(self, attr) for attr in self.columns())

    def as_dict(self):
        """Returns the row as dictionary of (key, value) pairs.

        Returns
        -------
        dict
            Dictionary of attribute names and their values
        """
        return {k: v for k, v in asdict(self).items() if k not in self._skip_attrs}

    def index_refs(self):
        """Fetches the valid references of this row to rows of other tables.

        Returns
        -------
        Dict[str, Tuple[str, int]]
            Maps the name of each referenced row (attribute name without its
            `_id` suffix) onto a (table name, row index) pair
        """
        refs = {}
        for attr, table in self._index_attrs:
            value = getattr(self, attr)
            if value != INVAL_IDX:
                refs[attr.removesuffix("_id")] = (table, value)

        return refs

    @property
    def index_attrs(self):
        """Fetches the attributes that correspond to indexes.

        Returns
        -------
        Dict[str, str]
            Maps index attributes onto the name of the table they refer to
        """
        return dict(self._index_attrs)
