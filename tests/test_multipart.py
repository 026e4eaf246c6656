"""Tests for multipart body construction."""

from unittest.mock import patch

import pytest

from integrations.wordpress.multipart import (
    BOUNDARY_PREFIX,
    build_multipart_body,
    filename_from_url,
    guess_content_type,
)


class TestBuildMultipartBody:
    """Single-part bodies for the media endpoint."""

    def test_layout(self):
        body, boundary = build_multipart_body(b"hello", "note.txt", "text/plain")
        assert boundary.startswith(BOUNDARY_PREFIX)
        assert body == (
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="file"; filename="note.txt"\r\n'
            f"Content-Type: text/plain\r\n\r\n"
            f"hello"
            f"\r\n--{boundary}--\r\n"
        ).encode()

    def test_exactly_one_part(self):
        body, boundary = build_multipart_body(b"\x00\x01binary", "image.png")
        assert body.count(f"--{boundary}\r\n".encode()) == 1
        assert body.count(f"--{boundary}--".encode()) == 1
        assert body.count(b"Content-Disposition") == 1

    def test_content_type_guessed_from_filename(self):
        body, _ = build_multipart_body(b"x", "photo.JPG")
        assert b"Content-Type: image/jpeg\r\n" in body

    def test_boundary_never_inside_payload(self):
        clash = BOUNDARY_PREFIX + "aaaaaaaaaaaaaaaa"
        fresh = BOUNDARY_PREFIX + "bbbbbbbbbbbbbbbb"
        data = b"payload " + clash.encode() + b" payload"
        with patch("integrations.wordpress.multipart.new_boundary", side_effect=[clash, fresh]):
            body, boundary = build_multipart_body(data, "clash.bin")
        assert boundary == fresh
        assert body.startswith(f"--{fresh}\r\n".encode())

    def test_filename_cannot_break_the_header(self):
        body, _ = build_multipart_body(b"x", 'evil"\r\nX-Injected: 1.txt')
        assert b"\r\nX-Injected" not in body
        assert b'filename="evil%22X-Injected: 1.txt"' in body


class TestHelpers:
    """Content type table and URL filenames."""

    @pytest.mark.parametrize("filename,expected", [
        ("a.png", "image/png"),
        ("a.jpeg", "image/jpeg"),
        ("a.gif", "image/gif"),
        ("a.webp", "image/webp"),
        ("a.svg", "image/svg+xml"),
        ("a.pdf", "application/pdf"),
        ("a.mp4", "video/mp4"),
        ("a.mp3", "audio/mpeg"),
        ("a.zip", "application/zip"),
        ("a.docx", "application/octet-stream"),
        ("README", "application/octet-stream"),
    ])
    def test_guess_content_type(self, filename, expected):
        assert guess_content_type(filename) == expected

    @pytest.mark.parametrize("url,expected", [
        ("https://cdn.example.com/img/cat.png", "cat.png"),
        ("https://cdn.example.com/img/cat.png?w=300", "cat.png"),
        ("https://cdn.example.com/img/folder/", "folder"),
        ("https://cdn.example.com/", "upload"),
        ("https://cdn.example.com", "upload"),
    ])
    def test_filename_from_url(self, url, expected):
        assert filename_from_url(url) == expected
