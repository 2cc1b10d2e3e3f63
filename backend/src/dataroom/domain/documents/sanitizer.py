"""Filename sanitization and storage key conventions

Storage keys have the form ``<epoch-millis>_<sanitized-name>``. The prefix is
the only on-disk contract: display names are recovered by stripping it.
"""

import re
import time
import unicodedata
from typing import Optional


COMBINING_MARKS = re.compile(r'[\u0300-\u036f]')
UNSAFE_CHARS = re.compile(r'[^\w.-]', re.ASCII)
UNDERSCORE_RUNS = re.compile(r'_+')
UNDERSCORE_BEFORE_DOT = re.compile(r'_(?=\.)')
TIMESTAMP_PREFIX = re.compile(r'^\d+_')


def sanitize_filename(raw_name: Optional[str]) -> str:
    """Turn an arbitrary user-supplied filename into a safe key fragment.

    Total function: never raises, never returns None. The result only holds
    characters from ``[a-z0-9._-]`` and may be empty.

    Args:
        raw_name: Filename as supplied by the uploader

    Returns:
        Sanitized filename

    Example:
        >>> sanitize_filename('Q3 Financials (v2).xlsx')
        'q3_financials_v2.xlsx'
        >>> sanitize_filename('Résumé Final.pdf')
        'resume_final.pdf'
    """
    name = unicodedata.normalize('NFD', raw_name or '')
    name = COMBINING_MARKS.sub('', name)
    name = UNSAFE_CHARS.sub('_', name)
    name = UNDERSCORE_RUNS.sub('_', name)
    name = UNDERSCORE_BEFORE_DOT.sub('', name)
    name = name.strip('_')
    return name.lower()


def current_epoch_millis() -> int:
    """Wall-clock time in Unix epoch milliseconds."""
    return time.time_ns() // 1_000_000


def build_storage_key(raw_name: Optional[str], epoch_millis: int) -> str:
    """Build the storage key for an upload.

    Example:
        >>> build_storage_key('Q3 Financials (v2).xlsx', 1716400000000)
        '1716400000000_q3_financials_v2.xlsx'
    """
    return f"{epoch_millis}_{sanitize_filename(raw_name)}"


def display_name_for(storage_key: str) -> str:
    """Strip the leading ``<epoch-millis>_`` prefix from a storage key."""
    return TIMESTAMP_PREFIX.sub('', storage_key, count=1)
