"""Pattern store adapters: read per-pattern angular samples from a reference store.

The engine depends only on the ``PatternStore`` protocol (a single ``fetch``),
so any backing store can be plugged in. Three adapters ship here:

- ``InMemoryPatternStore``: raw rows held in a dict (tests, embedding callers)
- ``CsvPatternStore``: one delimited file, one row per sample, read with pandas
- ``SqlPatternStore``: a SQL table read through SQLAlchemy Core

Adapters never cache: every ``fetch`` reads the backing store and validates the
rows with ``build_sample_set``. No rows for an id raises PatternNotFoundError;
rows that break the sorted/finite invariant raise MalformedPatternError.

CSV format (comma or semicolon separated, header required):
pattern_id,angle_deg,co_polar_v,cross_polar_v,co_polar_h,cross_polar_h
ANT1,0,30,28,30,28
ANT1,10,25,20,25,20
... etc. Empty cells are missing values.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Union, runtime_checkable

import pandas as pd
import sqlalchemy as sa
from sqlalchemy import types
from sqlalchemy.engine import Engine

from .errors import MalformedPatternError, PatternNotFoundError
from .patterns import COLUMNS, PatternSampleSet, build_sample_set


logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "antenna_discrimination"

# Accepted header spellings -> canonical column
_CSV_ALIASES: Dict[str, str] = {
    "pattern": "pattern_id",
    "patternid": "pattern_id",
    "antenna": "pattern_id",
    "antenna_id": "pattern_id",
    "angle": "angle_deg",
    "angle_degrees": "angle_deg",
    "off_axis_deg": "angle_deg",
    "co_v": "co_polar_v",
    "copolar_v": "co_polar_v",
    "disc_co_v": "co_polar_v",
    "x_v": "cross_polar_v",
    "cross_v": "cross_polar_v",
    "xpolar_v": "cross_polar_v",
    "disc_x_v": "cross_polar_v",
    "co_h": "co_polar_h",
    "copolar_h": "co_polar_h",
    "disc_co_h": "co_polar_h",
    "x_h": "cross_polar_h",
    "cross_h": "cross_polar_h",
    "xpolar_h": "cross_polar_h",
    "disc_x_h": "cross_polar_h",
}


@runtime_checkable
class PatternStore(Protocol):
    """Capability the engine consumes: fetch one pattern's samples."""

    def fetch(self, pattern_id: str) -> PatternSampleSet:
        ...


class InMemoryPatternStore:
    """Rows per pattern id kept in memory; validated on every fetch."""

    def __init__(self, patterns: Optional[Dict[str, Iterable[Sequence]]] = None):
        self._rows: Dict[str, List[tuple]] = {}
        for pid, rows in (patterns or {}).items():
            self.add(pid, rows)

    def add(self, pattern_id: str, rows: Iterable[Sequence]) -> None:
        self._rows[str(pattern_id)] = [tuple(r) for r in rows]

    def remove(self, pattern_id: str) -> None:
        self._rows.pop(str(pattern_id), None)

    def pattern_ids(self) -> List[str]:
        return sorted(self._rows)

    def fetch(self, pattern_id: str) -> PatternSampleSet:
        rows = self._rows.get(pattern_id)
        if rows is None:
            raise PatternNotFoundError(f"no reference data for pattern {pattern_id!r}", pattern_id)
        return build_sample_set(pattern_id, rows)


def _normalize_header(name: str) -> str:
    key = str(name).strip().lower().replace(" ", "_").replace("-", "_")
    return _CSV_ALIASES.get(key, key)


class CsvPatternStore:
    """Samples for all patterns in one CSV file, re-read on every fetch."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> pd.DataFrame:
        logger.debug("Reading pattern samples from %s", self.path)
        df = pd.read_csv(
            self.path,
            sep=r"\s*[;,]\s*",
            engine="python",
            comment="#",
            dtype=str,
            skip_blank_lines=True,
        )
        df = df.rename(columns=_normalize_header)
        required = ["pattern_id", "angle_deg", *COLUMNS]
        missing = [c for c in required if c not in df.columns]
        if missing:
            raise MalformedPatternError(f"{self.path}: missing columns {missing}")
        return df[required]

    def fetch(self, pattern_id: str) -> PatternSampleSet:
        df = self._read()
        ids = df["pattern_id"].astype(str).str.strip()
        sel = df[ids == str(pattern_id)]
        if sel.empty:
            raise PatternNotFoundError(f"no reference data for pattern {pattern_id!r}", pattern_id)
        rows = sel[["angle_deg", *COLUMNS]].itertuples(index=False, name=None)
        return build_sample_set(pattern_id, rows)


def pattern_table(metadata: sa.MetaData, name: str = DEFAULT_TABLE_NAME) -> sa.Table:
    """Declare the discrimination sample table on ``metadata``.

    One row per (pattern, angle). Discrimination columns are nullable; a SQL
    NULL is a missing value.
    """
    return sa.Table(
        name,
        metadata,
        sa.Column("id", types.Integer, primary_key=True),
        sa.Column("pattern_id", types.String(64), nullable=False, index=True),
        sa.Column("angle_deg", types.Float, nullable=False),
        *(sa.Column(col, types.Float, nullable=True) for col in COLUMNS),
    )


class SqlPatternStore:
    """Samples read from a SQL table through SQLAlchemy Core."""

    def __init__(self, engine: Union[str, Engine], table_name: str = DEFAULT_TABLE_NAME):
        self.engine: Engine = sa.create_engine(engine) if isinstance(engine, str) else engine
        self.table = pattern_table(sa.MetaData(), table_name)

    def fetch(self, pattern_id: str) -> PatternSampleSet:
        t = self.table
        stmt = (
            sa.select(t.c.angle_deg, *(t.c[col] for col in COLUMNS))
            .where(t.c.pattern_id == pattern_id)
            .order_by(t.c.angle_deg)
        )
        logger.debug("Querying %s for pattern %s", t.name, pattern_id)
        with self.engine.connect() as conn:
            rows = [tuple(r) for r in conn.execute(stmt)]
        if not rows:
            raise PatternNotFoundError(f"no reference data for pattern {pattern_id!r}", pattern_id)
        return build_sample_set(pattern_id, rows)
