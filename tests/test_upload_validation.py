"""Declared-type checks for the upload API."""

from app.core.upload_validation import detect_image_kind, format_size, validate_upload


class TestDetectImageKind:
    def test_content_type_wins(self) -> None:
        assert detect_image_kind("file.bin", "image/png; charset=binary") == "png"

    def test_falls_back_to_extension(self) -> None:
        assert detect_image_kind("photo.JPG", "application/octet-stream") == "jpeg"
        assert detect_image_kind("photo.webp", None) == "webp"

    def test_unknown(self) -> None:
        assert detect_image_kind("README", None) is None
        assert detect_image_kind("clip.mp4", "video/mp4") is None


class TestValidateUpload:
    def test_valid(self) -> None:
        assert validate_upload("cat.gif", "image/gif", size=10, max_size=100) == ("gif", None)

    def test_size_unknown_is_not_checked(self) -> None:
        assert validate_upload("cat.gif", "image/gif") == ("gif", None)

    def test_too_large(self) -> None:
        kind, err = validate_upload("cat.gif", "image/gif", size=3 * 1024 * 1024, max_size=1024 * 1024)
        assert kind == "gif"
        assert err == "File too large. Max size: 1 MB"

    def test_unsupported(self) -> None:
        kind, err = validate_upload("notes.txt", "text/plain")
        assert kind is None
        assert err.startswith("Unsupported file type")


class TestFormatSize:
    def test_units(self) -> None:
        assert format_size(10 * 1024 * 1024) == "10 MB"
        assert format_size(512 * 1024) == "512 KB"
        assert format_size(300) == "300 bytes"

    def test_small_limit_not_reported_as_zero(self) -> None:
        _, err = validate_upload("cat.gif", "image/gif", size=2000, max_size=1000)
        assert err == "File too large. Max size: 1000 bytes"


class TestSvgRefused:
    def test_svg_by_mime_and_extension(self) -> None:
        assert detect_image_kind("x.svg", "image/svg+xml") is None
        assert detect_image_kind("x.svg", None) is None
