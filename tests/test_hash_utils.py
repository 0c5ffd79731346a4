"""Tests for fingerprint and content digest helpers."""

import hashlib

from durrrrrenv.kernel.hash_utils import (
    canonicalize_or_identity,
    content_digest,
    fingerprint,
    sha256_hex,
)


class TestSha256Hex:
    def test_str_and_bytes_agree(self):
        assert sha256_hex("abc") == sha256_hex(b"abc")

    def test_known_vector(self):
        assert sha256_hex("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    def test_utf8_encoding(self):
        assert sha256_hex("café") == hashlib.sha256("café".encode("utf-8")).hexdigest()


class TestFingerprint:
    def test_existing_directory_uses_canonical_path(self, tmp_path):
        expected = hashlib.sha256(str(tmp_path.resolve()).encode("utf-8")).hexdigest()
        assert fingerprint(tmp_path) == expected

    def test_missing_directory_falls_back_to_literal_text(self, tmp_path):
        missing = str(tmp_path / "nope") + "/"
        assert canonicalize_or_identity(missing) == missing
        assert fingerprint(missing) == sha256_hex(missing)

    def test_deterministic(self, tmp_path):
        assert fingerprint(tmp_path) == fingerprint(str(tmp_path))


def test_content_digest_is_exact():
    assert content_digest("a\n") != content_digest("a")
    assert content_digest("a\n") == content_digest("a\n")
    assert len(content_digest("")) == 64
