from keyedlist._cli import main
from keyedlist._contracts import contracts_enabled, enable_contracts
from keyedlist._diff import DiffResult, Ignored, diff
from keyedlist._dup import DedupResult, count_duplicates, deduplicate
from keyedlist._group import KeyedMap
from keyedlist._key import HasItemKey, KeyExtractionError, WithKey, get_item_key, keyed_by, with_key
from keyedlist._strategies import keyed_lists

__all__ = [
    "DedupResult",
    "DiffResult",
    "HasItemKey",
    "Ignored",
    "KeyExtractionError",
    "KeyedMap",
    "WithKey",
    "contracts_enabled",
    "count_duplicates",
    "deduplicate",
    "diff",
    "enable_contracts",
    "get_item_key",
    "keyed_by",
    "keyed_lists",
    "main",
    "with_key",
]
