"""Core data structures: pixmaps, character boxes, text lines and the OCR job."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

MAX_LINES = 1024
NUM_ALT = 10
MAX_NUM_FRAMES = 8
MAX_FRAME_VECTORS = 128

UNKNOWN = 0xE000
PICTURE = 0xE001

_MARK_BITS = 7
_WHITE_OUTSIDE = 255 & ~_MARK_BITS


class OutputFormat(Enum):
    """Output encodings; values are the names accepted on the command line."""

    ISO8859_1 = "ISO8859_1"
    TEX = "TeX"
    HTML = "HTML"
    XML = "XML"
    SGML = "SGML"
    UTF8 = "UTF8"
    ASCII = "ASCII"


@dataclass(eq=False)
class Pixmap:
    """An 8-bit grey image; the three low bits of each pixel are marker bits."""

    width: int
    height: int
    pixels: Optional[bytearray] = None

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        size = self.width * self.height
        if self.pixels is None:
            self.pixels = bytearray([255]) * size
        else:
            self.pixels = bytearray(self.pixels)
            if len(self.pixels) != size:
                raise ValueError(
                    f"expected {size} pixels, got {len(self.pixels)}"
                )

    def outbounds(self, x: int, y: int) -> bool:
        """True if (x, y) lies outside the image."""
        return x < 0 or y < 0 or x >= self.width or y >= self.height

    def getpixel(self, x: int, y: int) -> int:
        """Grey value without marker bits; white outside the image."""
        if self.outbounds(x, y):
            return _WHITE_OUTSIDE
        return self.pixels[x + y * self.width] & ~_MARK_BITS

    def put(self, x: int, y: int, and_mask: int, or_mask: int) -> Optional[int]:
        """Combine a pixel with masks; return the new value, None if outside."""
        if self.outbounds(x, y):
            return None
        index = x + y * self.width
        value = ((self.pixels[index] & and_mask) | or_mask) & 0xFF
        self.pixels[index] = value
        return value

    def _is_black(self, x: int, y: int, cs: int) -> bool:
        return self.getpixel(x, y) < cs

    def get_bw(self, x0: int, x1: int, y0: int, y1: int, cs: int, mask: int) -> int:
        """Look for black (1) and white (2) pixels in a rectangle, limited by mask."""
        found = 0
        for y in range(min(y0, y1), max(y0, y1) + 1):
            for x in range(min(x0, x1), max(x0, x1) + 1):
                found |= 1 if self._is_black(x, y, cs) else 2
                if found & mask == mask:
                    return found & mask
        return found & mask

    def num_cross(self, x0: int, x1: int, y0: int, y1: int, cs: int) -> int:
        """Count white-to-black transitions along the line (x0,y0)-(x1,y1)."""
        steps = max(abs(x1 - x0), abs(y1 - y0))
        crossings = 0
        previous_black = False
        for i in range(steps + 1):
            if steps:
                x = x0 + round(i * (x1 - x0) / steps)
                y = y0 + round(i * (y1 - y0) / steps)
            else:
                x, y = x0, y0
            black = self._is_black(x, y, cs)
            if black and not previous_black:
                crossings += 1
            previous_black = black
        return crossings


@dataclass(eq=False)
class Box:
    """All information about one object (character, dot or picture) on the page."""

    x0: int = 0
    x1: int = 0
    y0: int = 0
    y1: int = 0
    x: int = 0
    y: int = 0
    dots: int = 0
    num_boxes: int = 1
    num_subboxes: int = 0
    c: int = UNKNOWN
    modifier: int = 0
    num: int = 0
    line: int = 0
    m1: int = 0
    m2: int = 0
    m3: int = 0
    m4: int = 0
    p: Optional[Pixmap] = None
    tac: List[int] = field(default_factory=list)
    wac: List[int] = field(default_factory=list)
    tas: List[Optional[str]] = field(default_factory=list)
    num_frames: int = 0
    frame_vol: List[int] = field(default_factory=lambda: [0] * MAX_NUM_FRAMES)
    frame_per: List[int] = field(default_factory=lambda: [0] * MAX_NUM_FRAMES)
    num_frame_vectors: List[int] = field(
        default_factory=lambda: [0] * MAX_NUM_FRAMES
    )
    frame_vector: List[List[int]] = field(default_factory=list)

    @property
    def num_ac(self) -> int:
        """Number of alternative characters stored for this box."""
        return len(self.tac)

    def height(self) -> int:
        return self.y1 - self.y0 + 1

    def width(self) -> int:
        return self.x1 - self.x0 + 1


@dataclass
class TextLine:
    """Vertical bounds and horizontal extent of one text line.

    m1 is the cap line, m2 the x-line, m3 the baseline and m4 the descender line.
    """

    m1: int = 0
    m2: int = 0
    m3: int = 0
    m4: int = 0
    x0: int = 0
    x1: int = 0
    wt: int = 100
    pitch: int = 0
    mono: int = 0


@dataclass
class LineTable:
    """The detected text lines together with the page skew vector."""

    dx: int = 0
    dy: int = 0
    lines: List[TextLine] = field(default_factory=list)

    def add(self, line: TextLine) -> int:
        """Append a line and return its index."""
        if len(self.lines) >= MAX_LINES:
            raise OverflowError(f"more than {MAX_LINES} text lines")
        self.lines.append(line)
        return len(self.lines) - 1

    def reset(self) -> None:
        self.lines.clear()
        self.dy = 0

    @property
    def num(self) -> int:
        return len(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> TextLine:
        return self.lines[index]

    def __iter__(self) -> Iterator[TextLine]:
        return iter(self.lines)


@dataclass
class Config:
    """Settings of an OCR run."""

    cs: int = 0
    spc: int = 0
    mode: int = 0
    dust_size: int = -1
    only_numbers: int = 0
    verbose: int = 0
    out_format: OutputFormat = OutputFormat.UTF8
    lc: str = "_"
    db_path: Optional[str] = None
    cfilter: Optional[str] = None
    certainty: int = 95
    unrec_marker: str = "_"


@dataclass
class Results:
    """Per-image results: boxes, output lines and statistics."""

    boxlist: List[Box] = field(default_factory=list)
    linelist: List[str] = field(default_factory=list)
    lines: LineTable = field(default_factory=LineTable)
    av_x: int = 5
    av_y: int = 8
    sum_x: int = 0
    sum_y: int = 0
    num_c: int = 0


@dataclass
class Job:
    """Everything needed for one OCR task."""

    fname: str = "-"
    cfg: Config = field(default_factory=Config)
    src: Optional[Pixmap] = None
    ppo: Optional[Pixmap] = None
    n_run: int = 0
    dblist: List[Box] = field(default_factory=list)
    res: Results = field(default_factory=Results)

    def init_image(self) -> None:
        """Reset per-image state before processing the next image."""
        self.src = None
        self.res = Results()
        self.n_run = 0
        self.ppo = None

    def free_image(self) -> None:
        """Release the per-image data."""
        self.res.boxlist.clear()
        self.src = None
        self.ppo = None