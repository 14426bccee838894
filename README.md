# ocrlayout

`ocrlayout` holds the building blocks of the page-layout stage of an optical
character recognition engine. It provides the data model for images,
character boxes and text lines, parses command-line style options into a
job configuration, computes statistics over the character boxes, refines
text line bounds once characters are recognised, and turns the recognised
boxes into lines of text (plain, HTML or XML).

It is pure Python and has no dependencies outside the standard library.

## Modules

| Module | Contents |
| --- | --- |
| `ocrlayout.model` | `Pixmap`, `Box`, `TextLine`, `LineTable`, `Config`, `Results`, `Job`, `OutputFormat` |
| `ocrlayout.boxlist` | `ObjectList`, an ordered list that stays safe to modify while it is being walked |
| `ocrlayout.options` | `parse_arguments`, `apply_options`, `Options`, `Action`, `OptionError`, `usage_text`, `version_text` |
| `ocrlayout.statistics` | `calc_average`, `detect_pictures`, `adjust_text_lines` |
| `ocrlayout.textout` | `store_boxtree_lines`, `calc_median_gap`, `get_least_line_indent`, `default_decode` |

## The data model

- `Pixmap(width, height, pixels=None)` is an 8-bit grey image, white by
  default. The three low bits of a pixel are marker bits: `getpixel` returns
  the value without them (and a white value outside the image), `put`
  combines a pixel with an AND and an OR mask. `get_bw` reports whether a
  rectangle holds black (1) and/or white (2) pixels below a threshold, and
  `num_cross` counts white-to-black transitions along a line.
- `Box` describes one object on the page: its bounding rectangle, the
  detected character code `c`, its text line, the line bounds `m1`..`m4`,
  and lists of alternative characters `tac` with weights `wac` and optional
  strings `tas`. `num_ac` is the number of alternatives.
- `TextLine` holds one line's guide lines together with its left and right
  ends `x0`/`x1`, a weight `wt` in percent, the word pitch and a monospace flag:
  - `m1` – top of capitals and ascenders
  - `m2` – top of lower-case letters (x-height line)
  - `m3` – the baseline
  - `m4` – bottom of descenders
- `LineTable` is the list of `TextLine`s plus the page skew vector `dx`,
  `dy`. `add` appends a line and returns its index (at most 1024 lines).
  Boxes whose `line` is 0 or less are treated as not belonging to a text
  line, so index 0 is usually a placeholder.
- `Job` bundles the file name, a `Config`, the source `Pixmap` and the
  per-image `Results` (box list, output lines, line table and average
  character size `av_x`/`av_y`). `init_image` resets the per-image state,
  `free_image` releases it.

The character codes `model.UNKNOWN` and `model.PICTURE` mark unrecognised
boxes and pictures.

## Options

`parse_arguments(argv)` takes the arguments without the program name and
returns an `Options` object. Values may follow their option directly
(`-v33`) or as the next argument (`-v 33`):

- `-i name` input image, `-o name` output file, `-e name` log file,
  `-x name` progress file
- `-p path` character database path
- `-f fmt` output format: `ISO8859_1`, `TeX`, `HTML`, `XML`, `SGML`, `UTF8`,
  `ASCII` (an unknown name is recorded in `Options.warnings`)
- `-l num` grey threshold, `-d num` dust size, `-s num` space width
- `-v num` verbosity bits and `-m num` mode bits (repeated values are OR-ed)
- `-n num` numbers only, `-a num` certainty in percent
- `-c chars`, `-C filter`, `-u marker` for unrecognised characters
- `-h`/`--help` and `-V`/`--version` set `Options.action` to `Action.HELP`
  or `Action.VERSION`; an empty argument list gives `Action.BANNER`

Unknown options and options missing their value raise `OptionError`.
`apply_options(options, job)` copies every given setting onto the job.
`usage_text()` and `version_text()` return the help and banner texts.

## Statistics

- `calc_average(job)` recomputes the mean character width and height from
  the boxes, skipping pictures, dots and oversized objects, and returns the
  number of boxes counted.
- `detect_pictures(job)` marks unusually large boxes as pictures, unless more
  than four boxes of similar height share their baseline (big headlines);
  it returns the number marked and raises `ValueError` if no characters have
  been counted yet.
- `adjust_text_lines(job)` refines each line's `m1`..`m4` from surely
  recognised characters, updates the line weights and the boxes' bounds,
  corrects the case of letters such as `o`/`O` by their height, and returns
  the number of characters whose case was changed.

## Text output

`store_boxtree_lines(job, decode=None)` walks `job.res.boxlist` in order and
appends finished lines to `job.res.linelist`. Boxes with character `"\n"`
end a line; large vertical gaps between lines become blank lines, and
indentation is rebuilt from the average character width. Characters whose
best weight is below the configured certainty are written as the
unrecognised-character marker. In XML mode each page, block, line, space and
box is written as an element with its coordinates and, for boxes with
alternatives, their weights and characters. `default_decode` renders a
character code and escapes `& < > "` in HTML, XML and SGML.

```python
from ocrlayout.model import Box, Job, TextLine
from ocrlayout.statistics import calc_average
from ocrlayout.textout import store_boxtree_lines

job = Job()
job.init_image()
job.res.lines.add(TextLine())  # placeholder line 0
job.res.lines.add(TextLine(m1=10, m2=14, m3=20, m4=24, x0=0, x1=20))
job.res.boxlist = [
    Box(x0=0, x1=6, y0=10, y1=20, c=ord("H"), line=1),
    Box(x0=9, x1=11, y0=10, y1=20, c=ord("i"), line=1),
]
calc_average(job)
store_boxtree_lines(job)
print(job.res.linelist)
```

## What this package does not do

It reads no image files and finds no character boxes in an image: the
`Pixmap` and the `Box` list must come from your own loader and
connected-component search. It does not recognise characters, and it does
not detect text lines, split a page into zones or estimate the skew angle;
the `LineTable` and its `dx`/`dy` must be filled by the caller. There is no
command-line program: the option parser fills a `Job`, but nothing runs a
full recognition from it.