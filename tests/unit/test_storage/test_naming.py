"""Tests for editor_api.storage.naming module.

Covers:
    - sanitize_basename: directory stripping, unsafe characters, fallback
    - generate_upload_filename / generate_design_filename: format, uniqueness
    - extension_for_mime: known types, fallback
"""

import re

import pytest

from editor_api.storage.naming import (
    extension_for_mime,
    file_extension,
    generate_design_filename,
    generate_upload_filename,
    guess_mime,
    original_extension,
    sanitize_basename,
)

UUID_RE = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"


class TestSanitizeBasename:
    """Tests for sanitize_basename()."""

    def test_strips_extension(self):
        assert sanitize_basename("Roboto-Regular.ttf") == "Roboto-Regular"

    def test_strips_directories(self):
        assert sanitize_basename("../../etc/passwd") == "passwd"
        assert sanitize_basename("C:\\fonts\\Arial.ttf") == "Arial"

    def test_replaces_unsafe_characters(self):
        assert sanitize_basename("My Font (Bold).otf") == "My-Font-Bold"

    def test_keeps_inner_dots(self):
        assert sanitize_basename("logo.v2.png") == "logo.v2"

    def test_empty_fallback(self):
        assert sanitize_basename("") == "file"
        assert sanitize_basename("###.png") == "file"

    def test_max_length(self):
        assert len(sanitize_basename("a" * 300 + ".ttf")) == 100


class TestFileExtension:
    """Tests for file_extension()."""

    def test_lowercases(self):
        assert file_extension("FONT.TTF") == ".ttf"

    def test_no_extension(self):
        assert file_extension("README") == ""

    def test_last_suffix_only(self):
        assert file_extension("archive.tar.gz") == ".gz"

    def test_original_extension_keeps_case(self):
        assert original_extension("Font.TTF") == ".TTF"
        assert original_extension("../dir/photo.Png") == ".Png"
        assert original_extension("README") == ""


class TestGenerateUploadFilename:
    """Tests for generate_upload_filename()."""

    def test_format(self):
        name = generate_upload_filename("Roboto.ttf")
        assert re.fullmatch(rf"Roboto-{UUID_RE}\.ttf", name)

    def test_deterministic_with_token(self):
        assert generate_upload_filename("a b.png", token="tok") == "a-b-tok.png"

    def test_keeps_original_extension_case(self):
        assert generate_upload_filename("Font.TTF", token="tok") == "Font-tok.TTF"

    def test_unique_for_identical_names(self):
        names = {generate_upload_filename("same.ttf") for _ in range(50)}
        assert len(names) == 50


class TestGenerateDesignFilename:
    """Tests for generate_design_filename()."""

    def test_format(self):
        assert re.fullmatch(rf"design-{UUID_RE}\.png", generate_design_filename("png"))

    def test_leading_dot_ignored(self):
        assert generate_design_filename(".webp", token="x") == "design-x.webp"


class TestExtensionForMime:
    """Tests for extension_for_mime()."""

    @pytest.mark.parametrize(
        "mime, ext",
        [
            ("image/png", "png"),
            ("image/jpeg", "jpeg"),
            ("image/gif", "gif"),
            ("image/webp", "webp"),
            ("image/svg+xml", "svg"),
            ("IMAGE/PNG", "png"),
        ],
    )
    def test_known_types(self, mime, ext):
        assert extension_for_mime(mime) == ext

    def test_unknown_falls_back_to_png(self):
        assert extension_for_mime("image/x-made-up") == "png"


class TestGuessMime:
    """Tests for guess_mime()."""

    def test_known(self):
        assert guess_mime("photo.png") == "image/png"

    def test_unknown(self):
        assert guess_mime("blob.unknownext") == "application/octet-stream"
