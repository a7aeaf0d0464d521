"""Record matching engine.

Two interchangeable strategies decide whether records from two
collections are the same:

- hash (diffbib.matching.exact): fingerprint equality over the compared fields
- bruteforce (diffbib.matching.approximate): nearest neighbour by edit distance

Main entry points:
- invoke: resolve a strategy by name and run it
- match_exact / match_approximate: call a strategy directly
"""

from diffbib.matching.approximate import (
    SIMILARITY_THRESHOLD,
    find_closest,
    match_approximate,
    normalized_distance,
)
from diffbib.matching.exact import match_exact
from diffbib.matching.fields import DEFAULT_FIELDS_CSV, normalize_fields, parse_fields_csv
from diffbib.matching.keys import FIELD_DELIMITER, build_lookup_table, fingerprint, project
from diffbib.matching.models import BUCKETS, DiffResult
from diffbib.matching.strategies import (
    Strategy,
    get_matcher,
    invoke,
    resolve_strategy,
    run_strategy,
    strategy_options,
    validate_threshold,
)

__all__ = [
    "BUCKETS",
    "DEFAULT_FIELDS_CSV",
    "FIELD_DELIMITER",
    "SIMILARITY_THRESHOLD",
    "DiffResult",
    "Strategy",
    "build_lookup_table",
    "find_closest",
    "fingerprint",
    "get_matcher",
    "invoke",
    "match_approximate",
    "match_exact",
    "normalize_fields",
    "normalized_distance",
    "parse_fields_csv",
    "project",
    "resolve_strategy",
    "run_strategy",
    "strategy_options",
    "validate_threshold",
]
