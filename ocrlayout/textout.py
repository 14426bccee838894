"""Turn the recognised boxes into text lines in the configured output format."""

from __future__ import annotations

import sys
from typing import Callable, Iterable, List, Optional

from .model import UNKNOWN, Box, Job, LineTable, OutputFormat, TextLine

INT_MAX = 2**31 - 1

Decoder = Callable[[int, OutputFormat], str]

_MARKUP_ESCAPES = {
    ord("&"): "&amp;",
    ord("<"): "&lt;",
    ord(">"): "&gt;",
    ord('"'): "&quot;",
}


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def default_decode(code: int, out_format: OutputFormat) -> str:
    """Render a character code; markup formats escape their special characters."""
    if code <= 0:
        return ""
    if out_format in (OutputFormat.HTML, OutputFormat.XML, OutputFormat.SGML):
        escaped = _MARKUP_ESCAPES.get(code)
        if escaped is not None:
            return escaped
    return chr(code)


def calc_median_gap(lines: LineTable) -> int:
    """Median distance between one line's baseline and the next line's x-line."""
    if lines.num < 2:
        return 0
    rows = list(lines)
    gaps = sorted(lower.m2 - upper.m3 for upper, lower in zip(rows, rows[1:]))
    return gaps[(lines.num - 1) // 2]


def get_least_line_indent(boxes: Iterable[Box], dx: int, dy: int) -> int:
    """Smallest left position of all real boxes, corrected for page skew."""
    min_indent = INT_MAX
    for box in boxes:
        if box.num == -1:  # inserted space or newline
            continue
        adjusted = box.x0
        if dx:
            adjusted += _cdiv(box.y0 * dy, dx)
        min_indent = min(min_indent, adjusted)
    return min_indent


def _line_at(lines: LineTable, index: int) -> TextLine:
    if 0 <= index < lines.num:
        return lines[index]
    return TextLine()


def _tas(box: Box, index: int) -> Optional[str]:
    return box.tas[index] if index < len(box.tas) else None


def _geometry(box: Box) -> str:
    return (
        f'x="{box.x0}" y="{box.y0}" '
        f'dx="{box.x1 - box.x0 + 1}" dy="{box.y1 - box.y0 + 1}"'
    )


def store_boxtree_lines(job: Job, decode: Optional[Decoder] = None) -> None:
    """Collect the characters of all boxes into job.res.linelist."""
    decode = decode or default_decode
    cfg = job.cfg
    res = job.res
    lines = res.lines
    xml = cfg.out_format is OutputFormat.XML
    parts: List[str] = []
    j = 0
    count = non_space = decoded = 0
    oldline = -1

    median_gap = calc_median_gap(lines)
    if median_gap <= 0:
        if cfg.verbose & 1:
            print(
                f"# Warning: non-positive median line gap of {median_gap}",
                file=sys.stderr,
            )
        median_gap = 8
        max_single_space_gap = 12
    else:
        max_single_space_gap = median_gap * 7 // 4

    left_margin = get_least_line_indent(res.boxlist, lines.dx, lines.dy)

    def flush() -> None:
        res.linelist.append("".join(parts))
        parts.clear()

    if xml:
        parts.append('<page x="0" y="0" dx="0" dy="0">\n')
        parts.append('<block x="0" y="0" dx="0" dy="0">\n')

    for box in res.boxlist:
        line = box.line
        if box.num_ac and box.wac[0] < cfg.certainty:
            box.c = UNKNOWN
        if line != oldline:
            if xml and oldline > -1:
                parts.append("</line>\n")
                flush()
                j = 0
            if xml:
                info = _line_at(lines, line)
                parts.append(
                    f'<line x="{info.x0}" y="{info.m1}" '
                    f'dx="{info.x1 - info.x0 + 1}" dy="{info.m4 - info.m1}" '
                    f'value="{line}">\n'
                )
            oldline = line
        if ord(" ") < box.c <= ord("z"):
            non_space += 1

        if box.c == ord("\n") and not xml:
            if line > 0:
                line_gap = _line_at(lines, line).m2 - _line_at(lines, line - 1).m3
                line_gap -= max_single_space_gap
                while line_gap > 0:
                    parts.append("\n")
                    j += 1
                    line_gap -= median_gap
            flush()
            j = 0

        if box.c == ord(" "):
            if res.av_x:
                if xml:
                    parts.append(f" <space {_geometry(box)} />\n")
                else:
                    parts.append(" ")
                    j += 1
        elif box.c != ord("\n"):
            if j == 0 and res.av_x:
                indent = box.x0 - _line_at(lines, line).x0
                if lines.dx:
                    indent += _cdiv(box.y0 * lines.dy, lines.dx)
                indent -= left_margin
                if xml:
                    parts.append(f" <space {_geometry(box)} />\n")
                else:
                    spaces = max(0, _cdiv(indent, res.av_x))
                    parts.append(" " * spaces)
                    j += spaces
            if xml:
                parts.append(f' <box {_geometry(box)} value="')
            first_tas = _tas(box, 0)
            if box.c != UNKNOWN and box.c != 0:
                parts.append(decode(box.c, cfg.out_format))
                if ord(" ") < box.c <= ord("z"):
                    decoded += 1
            else:
                if box.num_ac > 0 and first_tas and not first_tas.startswith("<"):
                    parts.append(first_tas)
                    j += len(first_tas)
                if box.num_ac == 0 or box.c == UNKNOWN:
                    if cfg.unrec_marker:
                        parts.append(cfg.unrec_marker)
            if xml:
                if box.num_ac > 0:
                    parts.append(f'" numac="{box.num_ac}" weights="')
                    parts.append(",".join(str(w) for w in box.wac[: box.num_ac]))
                    parts.append('" achars="')
                    alternatives = []
                    for index, code in enumerate(box.tac):
                        alt = _tas(box, index)
                        if alt and not alt.startswith("<"):
                            alternatives.append(alt)
                        else:
                            alternatives.append(decode(code, cfg.out_format))
                    parts.append(",".join(alternatives))
                parts.append('" />\n')
            if box.num_ac and first_tas and first_tas.startswith("<"):
                parts.append(first_tas)
                if xml:
                    parts.append("\n")
                j += len(first_tas)
            j += 1
        count += 1

    if xml and oldline > -1:
        parts.append("</line>\n")
    if xml:
        parts.append("</block>\n</page>\n")
    flush()
    if cfg.verbose & 1:
        print(
            f"... {count} lines, boxes= {non_space}, chars= {decoded}",
            file=sys.stderr,
        )