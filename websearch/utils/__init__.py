"""Utilities package - Flat structure (no nested directories)"""

# Hash utilities
from .hash_utils import hash_string, generate_cache_key

# URL utilities
from .url_utils import normalize_href, unwrap_redirect_url, normalize_result_url

# Text utilities
from .text_utils import normalize_query, clean_text

# Time utilities
from .time_utils import utcnow

__all__ = [
    # hash
    "hash_string",
    "generate_cache_key",
    # url
    "normalize_href",
    "unwrap_redirect_url",
    "normalize_result_url",
    # text
    "normalize_query",
    "clean_text",
    # time
    "utcnow",
]
