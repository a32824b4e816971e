"""Content fingerprints over the canonical serialization of a payload.

Canonical form: camelCase keys sorted at every level, no insignificant
whitespace, absent optional fields omitted, and integral floats written as
integers so that ``5`` and ``5.0`` hash the same. Category order is kept,
since it is part of the payload's meaning.
"""

import hashlib
import json
from typing import Any

from factgrid.domain.snapshot.model.payload import SnapshotPayload


def _normalize(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def canonical_json(payload: SnapshotPayload) -> str:
    data = payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(
        _normalize(data),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def fingerprint(payload: SnapshotPayload) -> str:
    """SHA-256 hex digest of the payload's canonical serialization."""
    return hashlib.sha256(canonical_json(payload).encode("utf-8")).hexdigest()
