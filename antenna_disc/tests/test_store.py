import pytest
import sqlalchemy as sa

from antenna_disc.errors import MalformedPatternError, PatternNotFoundError
from antenna_disc.store import (
    CsvPatternStore,
    InMemoryPatternStore,
    PatternStore,
    SqlPatternStore,
    pattern_table,
)

from .helpers import ANT1_ROWS


def test_stores_satisfy_protocol(tmp_path):
    assert isinstance(InMemoryPatternStore(), PatternStore)
    assert isinstance(CsvPatternStore(tmp_path / "x.csv"), PatternStore)
    assert isinstance(SqlPatternStore("sqlite://"), PatternStore)


def test_in_memory_store_fetch_and_not_found():
    store = InMemoryPatternStore({"ANT1": ANT1_ROWS})
    s = store.fetch("ANT1")
    assert s.pattern_id == "ANT1"
    assert list(s.angles_deg) == [0.0, 10.0, 20.0]
    assert store.pattern_ids() == ["ANT1"]
    store.remove("ANT1")
    with pytest.raises(PatternNotFoundError):
        store.fetch("ANT1")


def test_in_memory_store_returns_fresh_set_each_fetch():
    store = InMemoryPatternStore({"ANT1": ANT1_ROWS})
    assert store.fetch("ANT1") is not store.fetch("ANT1")


def test_csv_store_reads_patterns(tmp_path):
    p = tmp_path / "patterns.csv"
    p.write_text(
        "# measured RPE\n"
        "pattern_id,angle_deg,co_polar_v,cross_polar_v,co_polar_h,cross_polar_h\n"
        "ANT1,10,25,20,25,20\n"
        "ANT1,0,30,28,30,28\n"
        "ANT1,20,15,10,15,10\n"
        "ANT2,0,1,2,3,4\n",
        encoding="utf-8",
    )
    store = CsvPatternStore(p)
    s = store.fetch("ANT1")
    assert list(s.angles_deg) == [0.0, 10.0, 20.0]
    assert s.sample(1).co_polar_v == 25.0
    assert store.fetch("ANT2").max_angle_deg == 0.0
    with pytest.raises(PatternNotFoundError):
        store.fetch("ANT9")


def test_csv_store_semicolons_aliases_and_empty_cells(tmp_path):
    p = tmp_path / "patterns.csv"
    p.write_text(
        "antenna; angle; co_v; x_v; co_h; x_h\n"
        "101; 0; 30; 28; ; 28\n"
        "101; 10; 25; 20; 25; 20\n",
        encoding="utf-8",
    )
    s = CsvPatternStore(p).fetch("101")
    assert s.is_null(0, "co_polar_h")
    assert s.sample(0).cross_polar_h == 28.0


def test_csv_store_rereads_file(tmp_path):
    p = tmp_path / "patterns.csv"
    header = "pattern_id,angle_deg,co_polar_v,cross_polar_v,co_polar_h,cross_polar_h\n"
    p.write_text(header + "A,0,1,1,1,1\n", encoding="utf-8")
    store = CsvPatternStore(p)
    assert len(store.fetch("A")) == 1
    p.write_text(header + "A,0,1,1,1,1\nA,5,2,2,2,2\n", encoding="utf-8")
    assert len(store.fetch("A")) == 2


def test_csv_store_missing_columns(tmp_path):
    p = tmp_path / "patterns.csv"
    p.write_text("pattern_id,angle_deg,co_polar_v\nA,0,1\n", encoding="utf-8")
    with pytest.raises(MalformedPatternError):
        CsvPatternStore(p).fetch("A")


def test_csv_store_duplicate_angles(tmp_path):
    p = tmp_path / "patterns.csv"
    p.write_text(
        "pattern_id,angle_deg,co_polar_v,cross_polar_v,co_polar_h,cross_polar_h\n"
        "A,0,1,1,1,1\nA,0,2,2,2,2\n",
        encoding="utf-8",
    )
    with pytest.raises(MalformedPatternError):
        CsvPatternStore(p).fetch("A")


@pytest.fixture
def sql_engine():
    engine = sa.create_engine("sqlite://")
    md = sa.MetaData()
    table = pattern_table(md)
    md.create_all(engine)
    rows = [
        {"pattern_id": "ANT1", "angle_deg": a, "co_polar_v": cv, "cross_polar_v": xv,
         "co_polar_h": ch, "cross_polar_h": xh}
        for a, cv, xv, ch, xh in ANT1_ROWS
    ]
    rows.append({"pattern_id": "HOLEY", "angle_deg": 0.0, "co_polar_v": 1.0, "cross_polar_v": None,
                 "co_polar_h": 1.0, "cross_polar_h": 1.0})
    with engine.begin() as conn:
        conn.execute(table.insert(), rows)
    return engine


def test_sql_store_fetch(sql_engine):
    store = SqlPatternStore(sql_engine)
    s = store.fetch("ANT1")
    assert list(s.angles_deg) == [0.0, 10.0, 20.0]
    assert s.sample(2).cross_polar_h == 10.0
    assert store.fetch("HOLEY").is_null(0, "cross_polar_v")
    with pytest.raises(PatternNotFoundError):
        store.fetch("NOPE")


def test_sql_store_custom_table_name():
    engine = sa.create_engine("sqlite://")
    md = sa.MetaData()
    table = pattern_table(md, "rpe_samples")
    md.create_all(engine)
    with engine.begin() as conn:
        conn.execute(table.insert(), [{"pattern_id": "X", "angle_deg": 0.0, "co_polar_v": 1.0,
                                       "cross_polar_v": 2.0, "co_polar_h": 3.0, "cross_polar_h": 4.0}])
    s = SqlPatternStore(engine, table_name="rpe_samples").fetch("X")
    assert s.sample(0).cross_polar_h == 4.0
