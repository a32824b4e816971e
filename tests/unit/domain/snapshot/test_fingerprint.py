"""Unit tests for payload canonicalization and fingerprints."""

import json

from factgrid.domain.snapshot.fingerprint import canonical_json, fingerprint
from factgrid.domain.snapshot.model.payload import Category, SnapshotPayload


def _payload(**overrides) -> SnapshotPayload:
    fields = {
        "unit_label": "people",
        "dot_value": 1_000_000,
        "total": 8_100_000_000,
        "categories": (
            Category(key="online", label="Online", value=5_400_000_000),
            Category(key="offline", label="Offline", value=2_700_000_000),
        ),
        "notes": "World Bank 2023",
    }
    fields.update(overrides)
    return SnapshotPayload(**fields)


class TestCanonicalJson:
    def test_keys_are_camel_case_and_sorted(self):
        data = canonical_json(_payload())

        assert data.index('"categories"') < data.index('"dotValue"') < data.index('"unitLabel"')
        assert "unit_label" not in data

    def test_no_insignificant_whitespace(self):
        data = canonical_json(_payload())

        assert ": " not in data
        assert ", " not in data

    def test_absent_notes_are_omitted(self):
        data = json.loads(canonical_json(_payload(notes=None)))

        assert "notes" not in data

    def test_category_order_is_preserved(self):
        data = json.loads(canonical_json(_payload()))

        assert [c["key"] for c in data["categories"]] == ["online", "offline"]


class TestFingerprint:
    def test_is_sha256_hex(self):
        digest = fingerprint(_payload())

        assert len(digest) == 64
        int(digest, 16)

    def test_identical_content_hashes_equal(self):
        assert fingerprint(_payload()) == fingerprint(_payload())

    def test_integral_float_hashes_like_int(self):
        assert fingerprint(_payload(total=8_100_000_000.0)) == fingerprint(_payload(total=8_100_000_000))

    def test_changed_value_changes_hash(self):
        assert fingerprint(_payload(total=8_100_000_001)) != fingerprint(_payload())

    def test_changed_notes_change_hash(self):
        assert fingerprint(_payload(notes="World Bank 2024")) != fingerprint(_payload())

    def test_reordered_categories_change_hash(self):
        original = _payload()
        reordered = _payload(categories=tuple(reversed(original.categories)))

        assert fingerprint(reordered) != fingerprint(original)
