from .errors import (
    DiscriminationError,
    PatternNotFoundError,
    MalformedPatternError,
    IncompleteDataError,
    InvalidAngleError,
)
from .patterns import (
    COLUMNS,
    Polarization,
    PatternSample,
    PatternSampleSet,
    build_sample_set,
)
from .store import (
    PatternStore,
    InMemoryPatternStore,
    CsvPatternStore,
    SqlPatternStore,
    pattern_table,
)
from .cache import CacheStats, PatternCache
from .normalize import normalize_angle, validate_angle, is_half_plane
from .locate import locate_bounds
from .interpolate import interpolate_value, interpolate_columns
from .config import (
    EngineConfig,
    config_from_mapping,
    parse_config_text,
    load_config_file,
)
from .engine import (
    DiscriminationResult,
    DiscriminationEngine,
    query_discrimination,
)

__all__ = [
    "DiscriminationError",
    "PatternNotFoundError",
    "MalformedPatternError",
    "IncompleteDataError",
    "InvalidAngleError",
    "COLUMNS",
    "Polarization",
    "PatternSample",
    "PatternSampleSet",
    "build_sample_set",
    "PatternStore",
    "InMemoryPatternStore",
    "CsvPatternStore",
    "SqlPatternStore",
    "pattern_table",
    "CacheStats",
    "PatternCache",
    "normalize_angle",
    "validate_angle",
    "is_half_plane",
    "locate_bounds",
    "interpolate_value",
    "interpolate_columns",
    "EngineConfig",
    "config_from_mapping",
    "parse_config_text",
    "load_config_file",
    "DiscriminationResult",
    "DiscriminationEngine",
    "query_discrimination",
]
