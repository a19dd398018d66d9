from __future__ import annotations

"""
Configuration and Input Validation Service.

Acts as the primary gatekeeper for the graph pipeline. Ensures that the
configuration dictionary conforms to the expected schema and that the file
list handed over by the provider is a clean, ordered sequence of unique
FileRecord objects. Handles type coercion, path normalization and default
value injection so the downstream stages never have to.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple

from reviewgraph.domain.config import get_default_config
from reviewgraph.domain.constants import SUPPORTED_RANK_DIRS
from reviewgraph.domain.graph_models import FileRecord
from reviewgraph.infra.paths import normalize_repo_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (e.g. from the CLI or an embedding service)
    into strictly typed parameters. Fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary or None).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if config is None:
        return defaults, warnings

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition (Declarative mapping)
    bool_fields = ["compute_layout", "build_strategy"]

    positive_int_fields = ["node_width", "node_height", "max_crossing_passes"]

    non_negative_int_fields = [
        "node_sep", "rank_sep", "branch_sep", "margin_x", "margin_y"
    ]

    # 3. Field Processing & Normalization
    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults[field], field, warnings, strict
        )

    for field in positive_int_fields:
        merged[field] = _as_int(
            merged.get(field), defaults[field], field, warnings, strict, minimum=1
        )

    for field in non_negative_int_fields:
        merged[field] = _as_int(
            merged.get(field), defaults[field], field, warnings, strict, minimum=0
        )

    merged["rank_dir"] = _as_choice(
        merged.get("rank_dir"), defaults["rank_dir"], SUPPORTED_RANK_DIRS,
        "rank_dir", warnings, strict
    )

    # An explicitly empty list is legitimate: nothing is ignored.
    merged["ignored_parents"] = _as_list_str(
        merged.get("ignored_parents"), defaults["ignored_parents"],
        "ignored_parents", warnings, strict
    )

    unknown = sorted(k for k in config if k not in defaults)
    for key in unknown:
        warnings.append(f"Unknown configuration key '{key}' ignored.")
        merged.pop(key, None)

    return merged, warnings


def normalize_file_records(
        files: Any,
        *,
        strict: bool = False,
) -> Tuple[List[FileRecord], List[str]]:
    """
    Turn the provider's file list into clean, unique FileRecord objects.

    Preserves input order, which the classifier treats as significant.
    Accepts FileRecord instances, mappings with 'path' or 'filename' keys,
    and bare path strings.

    Args:
        files: Ordered iterable of raw file entries (None means empty).
        strict: If True, raises instead of skipping or coercing bad entries.

    Returns:
        Tuple[List[FileRecord], List[str]]: Normalized records and warnings.
    """
    warnings: List[str] = []
    if files is None:
        return [], warnings

    if isinstance(files, (str, bytes)) or not isinstance(files, Iterable):
        msg = f"Invalid file list: expected a sequence, received {type(files).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Treated as empty.")
        return [], warnings

    records: List[FileRecord] = []
    seen: Dict[str, int] = {}

    for i, entry in enumerate(files):
        record = _coerce_record(entry, i, warnings, strict)
        if record is None:
            continue
        if record.path in seen:
            msg = f"Duplicate path '{record.path}' at index {i}"
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg}; keeping first occurrence (index {seen[record.path]}).")
            continue
        seen[record.path] = i
        records.append(record)

    if warnings:
        for w in warnings:
            logger.debug(f"Input normalization: {w}")

    return records, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: RECORD COERCION
# -----------------------------------------------------------------------------

def _coerce_record(entry: Any, index: int, warnings: List[str], strict: bool) -> Optional[FileRecord]:
    """Convert one raw entry into a FileRecord or None when unusable."""
    if isinstance(entry, FileRecord):
        raw = FileRecord(entry.path, entry.additions, entry.deletions)
    elif isinstance(entry, str):
        raw = FileRecord(path=entry)
    elif isinstance(entry, Mapping):
        raw = FileRecord.from_mapping(entry)
    else:
        msg = f"Invalid file entry at index {index}: expected mapping, received {type(entry).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Entry discarded.")
        return None

    if not isinstance(raw.path, str):
        msg = f"Invalid path at index {index}: expected str, received {type(raw.path).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Entry discarded.")
        return None

    path = normalize_repo_path(raw.path)
    if not path:
        msg = f"Empty path at index {index}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Entry discarded.")
        return None

    additions = _as_count(raw.additions, f"[{index}].additions", warnings, strict)
    deletions = _as_count(raw.deletions, f"[{index}].deletions", warnings, strict)
    return FileRecord(path=path, additions=additions, deletions=deletions)


def _as_count(value: Any, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce a line counter into a non-negative int."""
    if value is None:
        return 0
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int):
        if value >= 0:
            return value
        msg = f"Negative counter '{field}' ({value})."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Clamped to 0.")
        return 0

    if not strict:
        try:
            coerced = int(str(value).strip())
        except ValueError:
            coerced = None
        if coerced is not None:
            warnings.append(f"Counter '{field}' converted from {value!r} to {max(coerced, 0)}.")
            return max(coerced, 0)

    msg = f"Invalid counter '{field}': expected int, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using 0.")
    return 0


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        # Support numeric coercion (0/1)
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        # Support string coercion (human-friendly keywords)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(
        value: Any,
        fallback: int,
        field: str,
        warnings: List[str],
        strict: bool,
        minimum: int = 0,
) -> int:
    """Validate integer inputs, supporting numeric strings outside strict mode."""
    if value is None:
        return fallback

    number: Optional[int] = None
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif not strict and isinstance(value, float) and value.is_integer():
        number = int(value)
    elif not strict and isinstance(value, str):
        try:
            number = int(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to {number}.")
        except ValueError:
            number = None

    if number is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number < minimum:
        msg = f"Invalid field '{field}': {number} is below the minimum of {minimum}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    return number


def _as_choice(
        value: Any,
        fallback: str,
        choices: Sequence[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Validate an enumerated string field (case-insensitive)."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip().upper()
        if v in choices:
            return v

    msg = f"Invalid field '{field}': {value!r} is not one of {list(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    # Support CSV string to list conversion for CLI compatibility
    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return items

    if isinstance(value, (list, tuple, set, frozenset)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s and s not in out:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)
