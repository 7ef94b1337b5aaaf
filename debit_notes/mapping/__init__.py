from .header_map import FIELD_CANDIDATES, FIELDS, HeaderMap, build_header_map
from .keys import normalize_key

__all__ = [
    "FIELD_CANDIDATES",
    "FIELDS",
    "HeaderMap",
    "build_header_map",
    "normalize_key",
]
