"""Printable asset generation: QR codes, ZIP archives and PDF posters."""
import os
import random
import zipfile
from typing import Iterable, List, Optional, Tuple

import qrcode
from fpdf import FPDF
from qrcode.exceptions import DataOverflowError
from qrcode.image.svg import SvgPathImage

from waypoint.core.config import settings
from waypoint.core.constants import (
    ASSET_CODE_LENGTH,
    BODY_FONT,
    BODY_FONT_FILE,
    GAME_NAME_FONT_SIZE,
    LOCATION_NAME_FONT_SIZE,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    QR_BORDER,
    QR_BOX_SIZE,
    QR_FORMAT_PNG,
    QR_FORMAT_SVG,
    QR_FORMATS,
    TITLE_FONT,
    TITLE_FONT_FILE,
)
from waypoint.core.exceptions import (
    EncodingError,
    FontLoadFailureError,
    MissingInputError,
    UnsupportedFormatError,
    WriteFailureError,
)
from waypoint.core.logging_config import get_logger
from waypoint.core.sanitization import display_url, sanitize_file_name
from waypoint.core.utils import Clock, nano_timestamp, new_code, utc_now
from waypoint.db.models import Location
from waypoint.schemas.assets import PDFData, PDFPage, QRCodeOptions

logger = get_logger(__name__)


def _svg_image_factory(foreground: str, background: str):
    """Build an SVG image factory drawing a single path in the given colors."""

    class ColoredSvgPathImage(SvgPathImage):
        QR_PATH_STYLE = {**SvgPathImage.QR_PATH_STYLE, "fill": foreground}

    ColoredSvgPathImage.background = background
    return ColoredSvgPathImage


class AssetGenerator:
    """
    Generates QR codes, archives and printable posters under the asset directory.

    The site URL, directories, clock and random source are captured at
    construction so that output is reproducible in tests.

    Args:
        site_url: Base URL embedded in QR codes (defaults to settings.SITE_URL)
        asset_dir: Directory generated files are written to
        font_dir: Directory holding the poster fonts
        clock: Returns the current time; used for file names
        rng: Random source for file name prefixes
    """

    def __init__(
        self,
        site_url: Optional[str] = None,
        asset_dir: Optional[str] = None,
        font_dir: Optional[str] = None,
        clock: Clock = utc_now,
        rng: Optional[random.Random] = None,
    ):
        self.site_url = (settings.SITE_URL if site_url is None else site_url).rstrip("/")
        self.asset_dir = (asset_dir or settings.ASSET_DIR).rstrip("/")
        self.font_dir = font_dir or settings.FONT_DIR
        self.clock = clock
        self.rng = rng

    # QR codes

    def create_qr_code_image(
        self, path: str, content: str, options: Optional[QRCodeOptions] = None
    ) -> None:
        """
        Render ``content`` as a QR code image at ``path``.

        Error correction is level M with a fixed box size and border.

        Raises:
            UnsupportedFormatError: If the format is neither png nor svg
            EncodingError: If the content does not fit in a QR code
            WriteFailureError: If the file cannot be written
        """
        options = options or QRCodeOptions()
        if options.format not in QR_FORMATS:
            raise UnsupportedFormatError(options.format)

        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=QR_BOX_SIZE,
            border=QR_BORDER,
        )
        # Newer qrcode releases report overflow as an invalid version ValueError
        try:
            qr.add_data(content)
            qr.make(fit=True)
        except (DataOverflowError, ValueError) as e:
            raise EncodingError(f"encoding text: {e}") from e

        try:
            self._ensure_parent(path)
            if options.format == QR_FORMAT_SVG:
                img = qr.make_image(
                    image_factory=_svg_image_factory(options.foreground, options.background)
                )
                # Written without an XML declaration so the file starts with <svg
                with open(path, "w", encoding="utf-8") as fh:
                    fh.write(img.to_string(encoding="unicode"))
            else:
                img = qr.make_image(fill_color=options.foreground, back_color=options.background)
                img.save(path)
        except OSError as e:
            raise WriteFailureError(f"writing QR code to {path}: {e}") from e

        logger.info("qr_code_created", path=path, format=options.format)

    def get_qr_code_path_and_content(
        self, action: str, id: str, name: str, extension: str
    ) -> Tuple[str, str]:
        """
        Return the file path and encoded URL for a location's QR code.

        ``action`` does not change the result; scan-in and scan-out codes
        share a URL.

        Returns:
            (path, content) where path is ``<asset_dir>/<ext>/<id> <name>.<ext>``
            and content is ``<site_url>/s/<id>``
        """
        name = sanitize_file_name(name)
        path = f"{self.asset_dir}/{extension}/{id} {name}.{extension}"
        content = f"{self.site_url}/s/{id}"
        return path, content

    def ensure_qr_code(
        self, action: str, id: str, name: str, extension: str
    ) -> Tuple[str, str]:
        """Return the QR code path and content, rendering the file if it is missing."""
        path, content = self.get_qr_code_path_and_content(action, id, name, extension)
        if not os.path.exists(path):
            self.create_qr_code_image(path, content, QRCodeOptions(format=extension))
        return path, content

    # Archives

    def create_archive(self, paths: Iterable[str]) -> str:
        """
        Zip the given files into a new archive in the asset directory.

        Entries keep their path relative to the asset directory and are
        written in input order. A failed archive is left on disk.

        Returns:
            Path to the archive

        Raises:
            MissingInputError: If an input file cannot be read
            WriteFailureError: If the archive cannot be created
        """
        archive_path = self._new_asset_path("zip")
        prefix = self.asset_dir + "/"

        try:
            archive = zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED)
        except OSError as e:
            raise WriteFailureError(f"could not create archive: {e}") from e

        with archive:
            for path in paths:
                arcname = path[len(prefix):] if path.startswith(prefix) else path
                try:
                    archive.write(path, arcname=arcname)
                except OSError as e:
                    raise MissingInputError(path) from e

        logger.info("archive_created", path=archive_path)
        return archive_path

    # PDFs

    def create_pdf(self, data: PDFData) -> str:
        """
        Build a poster PDF with one A4 page per location.

        Returns:
            Path to the PDF

        Raises:
            FontLoadFailureError: If a poster font cannot be loaded
            MissingInputError: If a page's QR image cannot be read
            WriteFailureError: If the PDF cannot be written
        """
        pdf = FPDF(orientation="P", unit="mm", format="A4")
        pdf.set_auto_page_break(False)

        for family, file_name in ((TITLE_FONT, TITLE_FONT_FILE), (BODY_FONT, BODY_FONT_FILE)):
            font_path = os.path.join(self.font_dir, file_name)
            try:
                pdf.add_font(family, "", font_path)
            except Exception as e:
                raise FontLoadFailureError(f"loading font {font_path}: {e}") from e

        for page in data.pages:
            self._add_page(pdf, page, data.instance_name)

        path = self._new_asset_path("pdf")
        try:
            pdf.output(path)
        except OSError as e:
            raise WriteFailureError(f"writing PDF to {path}: {e}") from e

        logger.info("pdf_created", path=path, pages=len(data.pages))
        return path

    def _add_page(self, pdf: FPDF, page: PDFPage, instance_name: str) -> None:
        pdf.add_page()

        if page.background is not None:
            pdf.set_fill_color(*page.background)
            pdf.rect(0, 0, PAGE_WIDTH, PAGE_HEIGHT, style="F")

        # Game name
        pdf.set_font(TITLE_FONT, "", GAME_NAME_FONT_SIZE)
        title = instance_name.upper()
        pdf.set_y(32)
        pdf.set_x((PAGE_WIDTH - pdf.get_string_width(title)) / 2)
        pdf.cell(130, 32, title)

        # Location name
        pdf.set_font(BODY_FONT, "", LOCATION_NAME_FONT_SIZE)
        pdf.set_y(40)
        pdf.set_x((PAGE_WIDTH - pdf.get_string_width(page.location_name)) / 2)
        pdf.cell(40, 70, page.location_name)

        # QR code; only raster images can be embedded
        if page.image_path.endswith("." + QR_FORMAT_PNG):
            try:
                pdf.image(page.image_path, x=50, y=90, w=110, h=110)
            except OSError as e:
                raise MissingInputError(page.image_path) from e

        # URL
        scan_text = display_url(page.url)
        pdf.set_y(180)
        pdf.set_x((PAGE_WIDTH - pdf.get_string_width(scan_text)) / 2)
        pdf.cell(40, 70, scan_text)

    # Bundles for a whole instance

    def create_qr_code_archive(self, locations: Iterable[Location]) -> str:
        """Render PNG and SVG codes for every location and zip them together."""
        paths: List[str] = []
        for location in locations:
            for extension in QR_FORMATS:
                path, _ = self.ensure_qr_code("in", location.marker_id, location.name, extension)
                paths.append(path)
        return self.create_archive(paths)

    def create_posters(self, instance_name: str, locations: Iterable[Location]) -> str:
        """Render a PNG code for every location and lay them out as posters."""
        data = PDFData(instance_name=instance_name)
        for location in locations:
            path, content = self.ensure_qr_code("in", location.marker_id, location.name, QR_FORMAT_PNG)
            data.pages.append(PDFPage(location_name=location.name, url=content, image_path=path))
        return self.create_pdf(data)

    # Helpers

    def _new_asset_path(self, extension: str) -> str:
        """``<asset_dir>/<random>-<nanoseconds>.<ext>``; unique across concurrent calls."""
        os.makedirs(self.asset_dir, exist_ok=True)
        code = new_code(ASSET_CODE_LENGTH, self.rng)
        return f"{self.asset_dir}/{code}-{nano_timestamp(self.clock())}.{extension}"

    @staticmethod
    def _ensure_parent(path: str) -> None:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
