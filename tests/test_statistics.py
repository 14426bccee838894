import pytest

from ocrlayout.model import PICTURE, Box, Job, TextLine
from ocrlayout.statistics import adjust_text_lines, calc_average, detect_pictures


def _box(x0, y0, w, h, **kwargs):
    return Box(x0=x0, x1=x0 + w - 1, y0=y0, y1=y0 + h - 1, c=ord("x"), **kwargs)


def _job(boxes):
    job = Job()
    job.res.boxlist.extend(boxes)
    return job


def test_calc_average_without_filters():
    job = _job([_box(0, 0, 10, 20), _box(20, 0, 10, 20)])
    job.res.av_x = 0
    assert calc_average(job) == 2
    assert job.res.av_x == 10
    assert job.res.av_y == 20
    assert job.res.sum_x == 20


def test_calc_average_skips_dots_and_pictures():
    picture = _box(0, 0, 10, 20)
    picture.c = PICTURE
    dot = _box(50, 0, 3, 3)
    job = _job([picture, dot, _box(20, 0, 10, 20)])
    job.res.av_x = 0
    assert calc_average(job) == 1
    assert job.res.av_x == 10


def test_calc_average_empty_keeps_previous_average():
    job = _job([])
    assert calc_average(job) == 0
    assert (job.res.av_x, job.res.av_y) == (5, 8)


def test_detect_pictures_requires_characters():
    job = _job([])
    with pytest.raises(ValueError):
        detect_pictures(job)


def test_detect_pictures_keeps_headline():
    chars = [_box(20 * i, 0, 10, 10) for i in range(5)]
    headline = [_box(100 * i, 100, 80, 80) for i in range(6)]
    job = _job(chars + headline)
    job.res.av_x = 0
    calc_average(job)
    assert detect_pictures(job) == 0
    assert all(box.c != PICTURE for box in headline)


def _line_job(boxes):
    job = _job(boxes)
    job.res.lines.dx = 1024
    job.res.lines.add(TextLine())
    job.res.lines.add(TextLine(m1=10, m2=14, m3=20, m4=24, x0=0, x1=100))
    return job


def _sure(code, x0, y0, y1):
    return Box(
        x0=x0, x1=x0 + 5, y0=y0, y1=y1, c=code, line=1, m2=14, m3=20,
        tac=[code], wac=[100],
    )


def test_adjust_needs_two_lines():
    job = _job([])
    job.res.lines.add(TextLine())
    assert adjust_text_lines(job) == 0
    assert job.res.lines[0].m1 == 0


def test_adjust_uses_sure_characters():
    boxes = [_sure(ord("a"), 0, 15, 20), _sure(ord("n"), 10, 15, 20)]
    job = _line_job(boxes)
    assert adjust_text_lines(job) == 0
    line = job.res.lines[1]
    assert line.m2 == 15
    assert line.m3 == 20
    assert line.m1 == 10
    assert line.m4 == 24
    assert line.wt < 100
    for box in boxes:
        assert (box.m1, box.m2, box.m3, box.m4) == (line.m1, line.m2, line.m3, line.m4)


def test_adjust_keeps_m4_below_m3():
    job = _line_job([_sure(ord("a"), 0, 15, 20)])
    adjust_text_lines(job)
    line = job.res.lines[1]
    assert line.m4 > line.m3 > line.m2 > line.m1


def test_adjust_moves_far_box_to_dummy_line():
    stray = Box(x0=0, x1=5, y0=-50, y1=-40, line=1)
    job = _line_job([stray])
    adjust_text_lines(job)
    assert stray.line == 0
    assert stray.m1 == job.res.lines[0].m1


def test_adjust_without_skew_vector_leaves_boxes():
    box = _sure(ord("a"), 0, 15, 20)
    job = _line_job([box])
    job.res.lines.dx = 0
    adjust_text_lines(job)
    assert job.res.lines[1].m2 == 14
    assert box.m2 == 14


def test_adjust_changes_case_of_ambiguous_letter():
    tac = [ord("o")] * 32
    box = Box(x0=0, x1=5, y0=10, y1=20, c=ord("o"), line=1, tac=tac, wac=[50] * 32)
    job = _line_job([box])
    assert adjust_text_lines(job) == 1
    assert box.tac[0] == ord("O")
    assert box.c == ord("O")
    assert box.wac[0] > 50