"""The static lookup table: construction, querying, and persistence.

Public API:
    PreloadTable: immutable two-level perfect hash over preloaded names
    LookupResult: (include_subdomains, found) pair from PreloadTable.lookup
    build_table: DomainEntry list -> PreloadTable
    build_displacement: the raw hash-displace-compress search
    dump_table / load_table: JSON artifact round trip
"""

from hsts_preload.table.artifact import (
    ArtifactError,
    dump_table,
    load_table,
    table_from_dict,
    table_to_dict,
)
from hsts_preload.table.builder import (
    TableBuildError,
    build_displacement,
    build_table,
    next_pow2,
    pack_name,
)
from hsts_preload.table.preload_table import LookupResult, PreloadTable

__all__ = [
    "ArtifactError",
    "LookupResult",
    "PreloadTable",
    "TableBuildError",
    "build_displacement",
    "build_table",
    "dump_table",
    "load_table",
    "next_pow2",
    "pack_name",
    "table_from_dict",
    "table_to_dict",
]
