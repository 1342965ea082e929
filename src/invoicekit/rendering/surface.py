"""Drawing surfaces used by the section renderers.

Coordinates are millimetres measured from the top-left corner of the page,
with y growing downward. Line widths and dash lengths are millimetres too;
font sizes are points.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Optional, Sequence

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from invoicekit.rendering import theme

ALIGNMENTS = ("left", "right", "center")


class DrawingSurface(ABC):
    """The drawing capabilities the section renderers rely on."""

    width = theme.PAGE_WIDTH
    height = theme.PAGE_HEIGHT

    def __init__(self) -> None:
        self.page_count = 1

    @abstractmethod
    def text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        size: float = theme.SIZE_BODY,
        bold: bool = False,
        color: str = theme.TEXT_PRIMARY,
        align: str = "left",
    ) -> None:
        """Place text with its baseline at y; x is the left, right or center anchor."""

    @abstractmethod
    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill: Optional[str] = None,
        stroke: Optional[str] = None,
        radius: float = 0.0,
        line_width: float = 0.2,
    ) -> None:
        """Draw a (rounded) rectangle with its top-left corner at (x, y)."""

    @abstractmethod
    def line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        color: str = theme.RULE,
        width: float = 0.2,
        dash: Optional[Sequence[float]] = None,
    ) -> None:
        """Draw a straight line."""

    @abstractmethod
    def image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        """Draw an image inside the given box.

        Raises:
            ValueError: If the image data cannot be decoded
        """

    @abstractmethod
    def link(self, url: str, x: float, y: float, width: float, height: float) -> None:
        """Make the given box a clickable hyperlink."""

    @abstractmethod
    def _start_page(self) -> None:
        pass

    def new_page(self) -> None:
        """Finish the current page and continue on a fresh one."""
        self._start_page()
        self.page_count += 1

    def text_width(self, text: str, size: float = theme.SIZE_BODY, bold: bool = False) -> float:
        """Width of ``text`` in millimetres for the standard Helvetica metrics."""
        font = theme.FONT_BOLD if bold else theme.FONT_REGULAR
        return pdfmetrics.stringWidth(text, font, size) / mm

    @staticmethod
    def _check_align(align: str) -> None:
        if align not in ALIGNMENTS:
            raise ValueError(f"Unknown alignment '{align}'")


@dataclass(frozen=True)
class DrawInstruction:
    """One recorded drawing call."""

    page: int
    kind: str
    attrs: dict[str, Any] = field(default_factory=dict)


class RecordingSurface(DrawingSurface):
    """Surface that records draw instructions instead of producing a PDF."""

    def __init__(self) -> None:
        super().__init__()
        self.instructions: list[DrawInstruction] = []

    def _record(self, kind: str, **attrs: Any) -> None:
        self.instructions.append(DrawInstruction(self.page_count, kind, attrs))

    def text(self, x, y, text, *, size=theme.SIZE_BODY, bold=False,
             color=theme.TEXT_PRIMARY, align="left"):
        self._check_align(align)
        self._record("text", x=x, y=y, text=text, size=size, bold=bold, color=color, align=align)

    def rect(self, x, y, width, height, *, fill=None, stroke=None, radius=0.0, line_width=0.2):
        self._record(
            "rect", x=x, y=y, width=width, height=height,
            fill=fill, stroke=stroke, radius=radius, line_width=line_width,
        )

    def line(self, x1, y1, x2, y2, *, color=theme.RULE, width=0.2, dash=None):
        self._record(
            "line", x1=x1, y1=y1, x2=x2, y2=y2, color=color, width=width,
            dash=tuple(dash) if dash else None,
        )

    def image(self, data, x, y, width, height):
        self._record("image", x=x, y=y, width=width, height=height, size=len(data))

    def link(self, url, x, y, width, height):
        self._record("link", url=url, x=x, y=y, width=width, height=height)

    def _start_page(self) -> None:
        self._record("page_break")

    def of_kind(self, kind: str) -> list[DrawInstruction]:
        return [ins for ins in self.instructions if ins.kind == kind]

    def texts(self) -> list[str]:
        return [ins.attrs["text"] for ins in self.of_kind("text")]

    def links(self) -> list[str]:
        return [ins.attrs["url"] for ins in self.of_kind("link")]


class ReportLabSurface(DrawingSurface):
    """Surface that draws onto an in-memory reportlab canvas.

    Create one per document; ``finish`` returns the PDF bytes.
    """

    def __init__(self, title: Optional[str] = None, author: Optional[str] = None):
        super().__init__()
        self._buffer = BytesIO()
        # invariant mode keeps output byte-stable for identical input
        self._canvas = canvas.Canvas(self._buffer, pagesize=A4, invariant=1)
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)
        self._content: Optional[bytes] = None

    def _y(self, y: float) -> float:
        return (self.height - y) * mm

    def text(self, x, y, text, *, size=theme.SIZE_BODY, bold=False,
             color=theme.TEXT_PRIMARY, align="left"):
        self._check_align(align)
        c = self._canvas
        c.setFont(theme.FONT_BOLD if bold else theme.FONT_REGULAR, size)
        c.setFillColor(HexColor(color))
        if align == "right":
            c.drawRightString(x * mm, self._y(y), text)
        elif align == "center":
            c.drawCentredString(x * mm, self._y(y), text)
        else:
            c.drawString(x * mm, self._y(y), text)

    def rect(self, x, y, width, height, *, fill=None, stroke=None, radius=0.0, line_width=0.2):
        c = self._canvas
        if fill:
            c.setFillColor(HexColor(fill))
        if stroke:
            c.setStrokeColor(HexColor(stroke))
            c.setLineWidth(line_width * mm)
            c.setDash([])
        args = (x * mm, self._y(y + height), width * mm, height * mm)
        if radius:
            c.roundRect(*args, radius * mm, stroke=int(bool(stroke)), fill=int(bool(fill)))
        else:
            c.rect(*args, stroke=int(bool(stroke)), fill=int(bool(fill)))

    def line(self, x1, y1, x2, y2, *, color=theme.RULE, width=0.2, dash=None):
        c = self._canvas
        c.setStrokeColor(HexColor(color))
        c.setLineWidth(width * mm)
        c.setDash([d * mm for d in dash] if dash else [])
        c.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def image(self, data, x, y, width, height):
        try:
            reader = ImageReader(BytesIO(data))
            reader.getSize()
        except Exception as e:
            raise ValueError(f"Unreadable image data: {e}") from e
        self._canvas.drawImage(
            reader,
            x * mm,
            self._y(y + height),
            width * mm,
            height * mm,
            mask="auto",
            preserveAspectRatio=True,
            anchor="nw",
        )

    def link(self, url, x, y, width, height):
        self._canvas.linkURL(
            url,
            (x * mm, self._y(y + height), (x + width) * mm, self._y(y)),
            relative=0,
            thickness=0,
        )

    def _start_page(self) -> None:
        self._canvas.showPage()

    def finish(self) -> bytes:
        """Close the document and return the PDF bytes (idempotent)."""
        if self._content is None:
            self._canvas.save()
            self._content = self._buffer.getvalue()
        return self._content
