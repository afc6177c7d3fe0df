"""Unit tests for QR code, archive and poster generation."""
import glob
import random
import re
import shutil
import zipfile
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from waypoint.core.config import settings
from waypoint.core.constants import BODY_FONT_FILE, TITLE_FONT_FILE
from waypoint.core.exceptions import (
    EncodingError,
    FontLoadFailureError,
    MissingInputError,
    UnsupportedFormatError,
    WriteFailureError,
)
from waypoint.schemas.assets import PDFData, PDFPage, QRCodeOptions
from waypoint.services.assets import AssetGenerator
from tests.utils import BASE_TIME, FakeClock

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def asset_dir(tmp_path):
    return str(tmp_path / "codes")


@pytest.fixture
def generator(asset_dir, tmp_path):
    return AssetGenerator(
        site_url="https://example.com",
        asset_dir=asset_dir,
        font_dir=str(tmp_path / "fonts"),
        clock=FakeClock(BASE_TIME),
        rng=random.Random(7),
    )


@pytest.mark.unit
class TestQRCodePath:
    """Test QR code path and content."""

    def test_sanitizes_name(self):
        generator = AssetGenerator(site_url="https://example.com", asset_dir="assets/codes")

        path, content = generator.get_qr_code_path_and_content(
            "print", "abc123", "  Library / West Wing 2  ", "png"
        )

        assert path == "assets/codes/png/abc123 Library  West Wing 2.png"
        assert content == "https://example.com/s/abc123"

    @pytest.mark.parametrize("extension", ["png", "svg"])
    @pytest.mark.parametrize("action", ["in", "out", "print"])
    def test_deterministic_and_keeps_extension(self, generator, action, extension):
        first = generator.get_qr_code_path_and_content(action, "XYZ", "Old Mill", extension)
        second = generator.get_qr_code_path_and_content("in", "XYZ", "Old Mill", extension)

        assert first == second
        assert first[0].endswith("." + extension)
        assert f"/{extension}/" in first[0]

    def test_site_url_captured_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "SITE_URL", "https://play.example.org")
        generator = AssetGenerator(asset_dir="assets/codes")
        monkeypatch.setattr(settings, "SITE_URL", "https://changed.example.org")

        _, content = generator.get_qr_code_path_and_content("in", "abc", "x", "png")

        assert content == "https://play.example.org/s/abc"

    def test_trailing_slash_removed(self):
        generator = AssetGenerator(site_url="https://example.com/", asset_dir="assets/codes")
        _, content = generator.get_qr_code_path_and_content("in", "abc", "x", "png")
        assert content == "https://example.com/s/abc"


@pytest.mark.unit
class TestQRCodeImage:
    """Test QR code rendering."""

    def test_png(self, generator, asset_dir):
        path = f"{asset_dir}/png/code.png"
        generator.create_qr_code_image(path, "https://example.com/s/abc")

        with open(path, "rb") as fh:
            assert fh.read(8) == PNG_MAGIC

    def test_svg(self, generator, asset_dir):
        path = f"{asset_dir}/svg/code.svg"
        generator.create_qr_code_image(path, "https://example.com/s/abc", QRCodeOptions(format="svg"))

        with open(path, "rb") as fh:
            assert fh.read(4) == b"<svg"

    def test_format_is_case_insensitive(self, generator, asset_dir):
        path = f"{asset_dir}/png/upper.png"
        generator.create_qr_code_image(path, "hello", QRCodeOptions(format=" PNG "))

        with open(path, "rb") as fh:
            assert fh.read(8) == PNG_MAGIC

    def test_svg_colors(self, generator, asset_dir):
        path = f"{asset_dir}/svg/colored.svg"
        options = QRCodeOptions(format="svg", foreground="#FF0000", background="#00ff00")

        generator.create_qr_code_image(path, "hello", options)

        with open(path, encoding="utf-8") as fh:
            svg = fh.read()
        assert 'fill="#ff0000"' in svg
        assert 'fill="#00ff00"' in svg

    def test_png_colors(self, generator, asset_dir):
        from PIL import Image

        path = f"{asset_dir}/png/colored.png"
        options = QRCodeOptions(foreground="#ff0000", background="#0000ff")

        generator.create_qr_code_image(path, "hello", options)

        with Image.open(path) as img:
            colors = {color for _, color in img.convert("RGB").getcolors()}
        assert colors == {(255, 0, 0), (0, 0, 255)}

    def test_unsupported_format(self, generator, asset_dir):
        path = f"{asset_dir}/gif/code.gif"
        with pytest.raises(UnsupportedFormatError, match="gif"):
            generator.create_qr_code_image(path, "hello", QRCodeOptions(format="gif"))
        assert not glob.glob(f"{asset_dir}/**/*", recursive=True)

    def test_content_too_large(self, generator, asset_dir):
        with pytest.raises(EncodingError):
            generator.create_qr_code_image(f"{asset_dir}/png/big.png", "x" * 5000)
        assert not glob.glob(f"{asset_dir}/**/*.png", recursive=True)

    def test_invalid_version_reported_as_encoding_error(self, generator, asset_dir):
        """qrcode 8 signals overflow with a ValueError from its version check."""
        overflow = ValueError("Invalid version (was 41, expected 1 to 40)")
        with patch("waypoint.services.assets.qrcode.QRCode.make", side_effect=overflow):
            with pytest.raises(EncodingError, match="Invalid version") as exc_info:
                generator.create_qr_code_image(f"{asset_dir}/png/big.png", "hello")

        assert exc_info.value.__cause__ is overflow

    def test_unwritable_path(self, generator, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(WriteFailureError):
            generator.create_qr_code_image(str(blocker / "code.png"), "hello")

    def test_invalid_color_rejected(self):
        with pytest.raises(ValueError):
            QRCodeOptions(foreground="red")

    def test_ensure_qr_code_renders_once(self, generator):
        with patch.object(generator, "create_qr_code_image", wraps=generator.create_qr_code_image) as render:
            path, content = generator.ensure_qr_code("in", "abc", "Gate", "png")
            generator.ensure_qr_code("in", "abc", "Gate", "png")

        assert render.call_count == 1
        assert content == "https://example.com/s/abc"
        with open(path, "rb") as fh:
            assert fh.read(8) == PNG_MAGIC


@pytest.mark.unit
class TestArchive:
    """Test ZIP archive packing."""

    def _write(self, path, data=b"data"):
        import os

        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as fh:
            fh.write(data)

    def test_entries_relative_to_asset_dir_in_order(self, generator, asset_dir):
        paths = [f"{asset_dir}/svg/b.svg", f"{asset_dir}/png/a.png"]
        for path in paths:
            self._write(path)

        archive_path = generator.create_archive(paths)

        with zipfile.ZipFile(archive_path) as archive:
            assert archive.namelist() == ["svg/b.svg", "png/a.png"]
            assert archive.read("png/a.png") == b"data"
            assert archive.getinfo("png/a.png").compress_type == zipfile.ZIP_DEFLATED

    def test_archive_name(self, generator, asset_dir):
        archive_path = generator.create_archive([])

        assert re.fullmatch(
            re.escape(asset_dir) + r"/[A-HJ-NPR-Z]{10}-1704067200000000000\.zip", archive_path
        )

    def test_archive_names_are_reproducible(self, asset_dir):
        def make():
            return AssetGenerator(
                site_url="", asset_dir=asset_dir, clock=FakeClock(BASE_TIME), rng=random.Random(3)
            )

        assert make()._new_asset_path("zip") == make()._new_asset_path("zip")

    def test_missing_input(self, generator, asset_dir):
        self._write(f"{asset_dir}/png/a.png")

        with pytest.raises(MissingInputError) as exc_info:
            generator.create_archive([f"{asset_dir}/png/a.png", f"{asset_dir}/png/missing.png"])

        assert exc_info.value.path.endswith("missing.png")
        # The partial archive is left behind
        assert glob.glob(f"{asset_dir}/*.zip")

    def test_qr_code_archive_for_locations(self, generator):
        locations = [
            SimpleNamespace(marker_id="AAAAA", name="Library"),
            SimpleNamespace(marker_id="BBBBB", name="Gym"),
        ]

        archive_path = generator.create_qr_code_archive(locations)

        with zipfile.ZipFile(archive_path) as archive:
            assert archive.namelist() == [
                "png/AAAAA Library.png",
                "svg/AAAAA Library.svg",
                "png/BBBBB Gym.png",
                "svg/BBBBB Gym.svg",
            ]


@pytest.mark.unit
class TestPDF:
    """Test poster layout."""

    @pytest.fixture
    def mock_fpdf(self):
        with patch("waypoint.services.assets.FPDF") as mock_cls:
            pdf = mock_cls.return_value
            pdf.get_string_width.return_value = 50
            yield mock_cls

    def _data(self, **page):
        page.setdefault("location_name", "Library")
        page.setdefault("url", "https://www.example.com/s/abc")
        page.setdefault("image_path", "codes/png/abc Library.png")
        return PDFData(instance_name="Campus Hunt", pages=[PDFPage(**page)])

    def test_layout(self, generator, asset_dir, tmp_path, mock_fpdf):
        path = generator.create_pdf(self._data())
        pdf = mock_fpdf.return_value

        mock_fpdf.assert_called_once_with(orientation="P", unit="mm", format="A4")
        families = [c.args[0] for c in pdf.add_font.call_args_list]
        assert families == ["ArchivoBlack", "OpenSans"]
        assert pdf.add_font.call_args_list[0].args[2] == str(tmp_path / "fonts" / TITLE_FONT_FILE)
        assert pdf.add_font.call_args_list[1].args[2] == str(tmp_path / "fonts" / BODY_FONT_FILE)

        pdf.add_page.assert_called_once()
        pdf.rect.assert_not_called()
        pdf.set_font.assert_any_call("ArchivoBlack", "", 28)
        pdf.set_font.assert_any_call("OpenSans", "", 20)
        assert [c.args[0] for c in pdf.set_y.call_args_list] == [32, 40, 180]
        # Centered: (210 - 50) / 2
        pdf.set_x.assert_any_call(80.0)

        texts = [c.args[2] for c in pdf.cell.call_args_list]
        assert texts == ["CAMPUS HUNT", "Library", "example.com/s/abc"]

        pdf.image.assert_called_once_with("codes/png/abc Library.png", x=50, y=90, w=110, h=110)
        pdf.output.assert_called_once_with(path)
        assert path.startswith(asset_dir + "/") and path.endswith(".pdf")

    def test_background(self, generator, mock_fpdf):
        generator.create_pdf(self._data(background=(10, 20, 30)))
        pdf = mock_fpdf.return_value

        pdf.set_fill_color.assert_called_once_with(10, 20, 30)
        pdf.rect.assert_called_once_with(0, 0, 210.0, 297.0, style="F")

    def test_svg_image_is_skipped(self, generator, mock_fpdf):
        generator.create_pdf(self._data(image_path="codes/svg/abc Library.svg"))
        mock_fpdf.return_value.image.assert_not_called()

    def test_one_page_per_location(self, generator, mock_fpdf):
        data = PDFData(
            instance_name="Hunt",
            pages=[
                PDFPage(location_name=f"Stop {i}", url="https://example.com", image_path="x.png")
                for i in range(3)
            ],
        )
        generator.create_pdf(data)
        assert mock_fpdf.return_value.add_page.call_count == 3

    def test_missing_image(self, generator, mock_fpdf):
        mock_fpdf.return_value.image.side_effect = FileNotFoundError("gone")
        with pytest.raises(MissingInputError):
            generator.create_pdf(self._data())

    def test_write_failure(self, generator, mock_fpdf):
        mock_fpdf.return_value.output.side_effect = PermissionError("read-only")
        with pytest.raises(WriteFailureError):
            generator.create_pdf(self._data())

    def test_missing_fonts(self, generator):
        with pytest.raises(FontLoadFailureError):
            generator.create_pdf(self._data())

    def test_background_channels_validated(self):
        with pytest.raises(ValueError):
            PDFPage(location_name="x", url="y", image_path="z", background=(0, 0, 256))

    def test_posters_for_locations(self, generator, mock_fpdf):
        locations = [SimpleNamespace(marker_id="AAAAA", name="Library")]

        generator.create_posters("Campus Hunt", locations)

        pdf = mock_fpdf.return_value
        image_path = pdf.image.call_args.args[0]
        assert image_path.endswith("/png/AAAAA Library.png")
        with open(image_path, "rb") as fh:
            assert fh.read(8) == PNG_MAGIC
        texts = [c.args[2] for c in pdf.cell.call_args_list]
        assert texts[-1] == "example.com/s/AAAAA"

    def test_real_pdf(self, generator, tmp_path, asset_dir):
        fonts = sorted(glob.glob("/usr/share/fonts/**/*.ttf", recursive=True))
        if not fonts:
            pytest.skip("no TrueType font installed")
        font_dir = tmp_path / "fonts"
        font_dir.mkdir()
        shutil.copy(fonts[0], font_dir / TITLE_FONT_FILE)
        shutil.copy(fonts[0], font_dir / BODY_FONT_FILE)

        path = generator.create_posters(
            "Campus Hunt", [SimpleNamespace(marker_id="AAAAA", name="Library")]
        )

        with open(path, "rb") as fh:
            assert fh.read(5) == b"%PDF-"
