"""Line statistics after recognition, mean character size and picture detection."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List

from .model import PICTURE, Box, Job

_MID_CHARS = "aemnr"
_TALL_CHARS = "bdhklABDEFGHIKLMNRT12346789"
_DESCENDER_CHARS = "gq"
_CASE_AMBIGUOUS = "cCoOpPsSuUvVwWxXyYzZ"


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _log(message: str) -> None:
    print(message, file=sys.stderr)


def _char_in(code: int, chars: str) -> bool:
    return 0 < code < 128 and chr(code) in chars


@dataclass
class _BoundStats:
    """Sums, counts, minima and maxima of the four bounds m1..m4 of one line."""

    sums: List[int] = field(default_factory=lambda: [0] * 4)
    counts: List[int] = field(default_factory=lambda: [0] * 4)
    mins: List[int] = field(default_factory=lambda: [0] * 4)
    maxs: List[int] = field(default_factory=lambda: [0] * 4)

    def add(self, bound: int, value: int) -> None:
        self.sums[bound] += value
        self.counts[bound] += 1
        self.mins[bound] = min(self.mins[bound], value)
        self.maxs[bound] = max(self.maxs[bound], value)

    def mean(self, bound: int) -> int:
        return _cdiv(self.sums[bound], self.counts[bound])

    def rounded_mean(self, bound: int) -> int:
        count = self.counts[bound]
        return _cdiv(self.sums[bound] + count // 2, count)


def _set_first_alternative(box: Box, code: int, weight: int) -> None:
    box.tac[0] = code
    if box.wac:
        box.wac[0] = weight
    else:
        box.wac.append(weight)
    box.c = code


def adjust_text_lines(job: Job) -> int:
    """Refine the line bounds from surely recognised characters.

    Returns the number of characters whose case was changed.
    """
    lines = job.res.lines
    verbose = job.cfg.verbose
    num = lines.num
    if num < 2:
        return 0
    if verbose:
        _log("# adjust_text_lines()")
    stats = [_BoundStats() for _ in range(num)]
    dy, dx = lines.dy, lines.dx

    if dx:
        for box in job.res.boxlist:
            if box.line <= 0 or box.line >= num:
                continue
            if box.num_ac < 1 or box.wac[0] < 98:
                continue
            if box.m2 == 0 or box.y1 < box.m2:
                continue
            if box.m3 == 4 or box.y0 > box.m3:
                continue
            skew = _cdiv(box.x1 * dy, dx)
            top = box.y0 - skew
            bottom = box.y1 - skew
            code = box.tac[0]
            entry = stats[box.line]
            if _char_in(code, _MID_CHARS):
                entry.add(1, top)
                entry.add(2, bottom)
            if _char_in(code, _TALL_CHARS):
                entry.add(0, top)
                entry.add(2, bottom)
            if _char_in(code, _DESCENDER_CHARS):
                entry.add(1, top)
                entry.add(3, bottom)

    for index in range(1, num):
        line = lines[index]
        entry = stats[index]
        n1, n2, n3, n4 = entry.counts
        diff = 0
        for bound, current in enumerate((line.m1, line.m2, line.m3, line.m4)):
            if entry.counts[bound]:
                diff += abs(current - entry.mean(bound))
        if n1 * n2 * n3 * n4 > 0:
            line.wt = _cdiv(line.wt + 100, 2)
        else:
            line.wt = _cdiv(line.wt * 90, 100)
        if n1:
            line.m1 = entry.rounded_mean(0)
        if n2:
            line.m2 = entry.rounded_mean(1)
        if n3:
            line.m3 = entry.rounded_mean(2)
        if n4:
            line.m4 = entry.rounded_mean(3)
        # very small fonts
        if line.m2 - line.m1 <= 1 and n2 == 0 and n1:
            line.m2 = line.m1 + 2
        if line.m2 - line.m1 <= 1 and n1 == 0 and n2:
            line.m1 = line.m2 - 2
        if line.m4 - line.m3 <= 1 and n4 == 0 and n3:
            line.m4 = line.m3 + 2
        if line.m4 - line.m3 <= 1 and n3 == 0 and n4:
            line.m3 = line.m4 - 2
        descent = line.m3 + _cdiv(line.m3 - line.m2, 4)
        if n4 < 1 and line.m4 <= descent:
            line.m4 = descent
        max_m3 = entry.maxs[2]
        if n4 < 1 and max_m3 > 0 and line.m4 < 2 * max_m3 - line.m3 + 2:
            line.m4 = 2 * max_m3 - line.m3 + 2
        if line.m4 <= line.m3:
            line.m4 = line.m3 + 1
        if verbose & 17:
            _log(
                f"#  line= {index:3d} m= {line.m1:4d} {line.m2 - line.m1:+3d} "
                f"{line.m3 - line.m1:+3d} {line.m4 - line.m1:+3d}  "
                f"n= {n1:2d} {n2:2d} {n3:2d} {n4:2d}  w= {line.wt:3d} diff= {diff}"
            )

    changed = 0
    if dx:
        for box in job.res.boxlist:
            if box.line <= 0 or box.line >= num:
                continue
            line = lines[box.line]
            if 2 * box.y0 < 2 * line.m1 - line.m4 + line.m1:
                box.line = 0
            line = lines[box.line]
            if 2 * box.y1 > 2 * line.m4 + line.m4 - line.m1:
                box.line = 0
            line = lines[box.line]
            skew = _cdiv(box.x1 * dy, dx)
            if box.num_ac > 31 and box.tac[0] < 127 and _char_in(box.tac[0], _CASE_AMBIGUOUS):
                letter = chr(box.tac[0])
                weight = _cdiv(box.wac[0] + 101, 2)
                if box.y0 - skew < _cdiv(line.m1 + line.m2, 2) and letter.islower():
                    _set_first_alternative(box, ord(letter.upper()), weight)
                    changed += 1
                    letter = letter.upper()
                if box.y0 - skew > _cdiv(line.m1 + line.m2 + 1, 2) and letter.isupper():
                    _set_first_alternative(box, ord(letter.lower()), weight)
                    changed += 1
            box.m1 = line.m1 + skew
            box.m2 = line.m2 + skew
            box.m3 = line.m3 + skew
            box.m4 = line.m4 + skew

    if verbose:
        _log(f"#  changed_chars= {changed}")
    return changed


def calc_average(job: Job) -> int:
    """Recalculate the mean character width and height; return the count used."""
    res = job.res
    res.num_c = res.sum_x = res.sum_y = 0
    seen = 0
    for box in res.boxlist:
        if box.c == PICTURE:
            continue
        width = box.x1 - box.x0 + 1
        height = box.y1 - box.y0 + 1
        seen += 1
        if res.av_x * res.av_y > 0:
            if width > 4 * res.av_x and height > 4 * res.av_y:
                continue  # small picture
            if 4 * height < res.av_y or box.y1 - box.y0 < 2:
                continue  # dots, commas, dashes
        if width < 4 and height < 6:
            continue
        res.sum_x += width
        res.sum_y += height
        res.num_c += 1
    if res.num_c:
        res.av_y = (res.sum_y + res.num_c // 2) // res.num_c
        res.av_x = (res.sum_x + res.num_c // 2) // res.num_c
    if job.cfg.verbose:
        _log(f"# averages: mXmY= {res.av_x} {res.av_y} nC= {res.num_c} n= {seen}")
    return res.num_c


def detect_pictures(job: Job) -> int:
    """Mark unusually large boxes as pictures; return how many were marked.

    Large boxes with more than four boxes of similar height on the same
    baseline are kept as characters (big headlines).
    """
    res = job.res
    verbose = job.cfg.verbose
    if res.num_c == 0:
        raise ValueError("no characters counted, run calc_average first")
    res.av_y = (res.sum_y + res.num_c // 2) // res.num_c
    res.av_x = (res.sum_x + res.num_c // 2) // res.num_c
    if verbose:
        _log(f"# pictures, frames, mXmY= {res.av_x} {res.av_y} ... ")
    marked = 0
    for box in res.boxlist:
        if box.c == PICTURE:
            continue
        x0, x1, y0, y1 = box.x0, box.x1, box.y0, box.y1
        if not (x1 - x0 + 1 > 4 * res.av_x or y1 - y0 + 1 > 4 * res.av_y):
            continue
        half = (y1 - y0 + 1) // 2
        similar = 0
        for other in res.boxlist:
            if other.c == PICTURE:
                continue
            h = other.y1 - other.y0
            if h > 2 * (y1 - y0) or 2 * h < y1 - y0:
                continue
            if (
                other.y0 > y0 + half or other.y0 < y0 - half
                or other.y1 > y1 + half or other.y1 < y1 - half
            ):
                continue
            similar += 1
        if similar > 4:
            continue
        box.c = PICTURE
        marked += 1
    if verbose:
        _log(f" {marked} - boxes {res.num_c - marked}")
    calc_average(job)
    return marked