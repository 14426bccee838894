"""Command-line option parsing for the OCR program."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .model import Job, OutputFormat

VERSION = "0.54"

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class OptionError(ValueError):
    """Raised for an unknown option or an option without its argument."""


class Action(Enum):
    """What the program should do after parsing."""

    RUN = "run"
    HELP = "help"
    VERSION = "version"
    BANNER = "banner"


@dataclass
class Options:
    """Parsed command-line settings; None means the option was not given."""

    action: Action = Action.RUN
    fname: Optional[str] = None
    error_file: Optional[str] = None
    output_file: Optional[str] = None
    progress_file: Optional[str] = None
    db_path: Optional[str] = None
    out_format: Optional[OutputFormat] = None
    lc: Optional[str] = None
    cfilter: Optional[str] = None
    dust_size: Optional[int] = None
    cs: Optional[int] = None
    spc: Optional[int] = None
    verbose: int = 0
    mode: int = 0
    only_numbers: Optional[int] = None
    certainty: Optional[int] = None
    unrec_marker: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def version_text() -> str:
    """The banner shown at start-up and when no arguments are given."""
    return f" Optical Character Recognition --- ocrlayout {VERSION}\n"


def usage_text() -> str:
    """The help text for -h and --help."""
    return version_text() + (
        " using: ocrlayout [options] pnm_file_name  # use - for stdin\n"
        " options:\n"
        " -h, --help, -V --version\n"
        " -i name   - input image file (pnm,pgm,pbm,ppm,pcx,...)\n"
        " -o name   - output file  (redirection of stdout)\n"
        " -e name   - logging file (redirection of stderr)\n"
        " -x name   - progress output to fifo\n"
        " -p name   - database path including final slash (default is ./db/)\n"
        " -f fmt    - output format (ISO8859_1 TeX HTML XML UTF8 ASCII)\n"
        " -l num    - threshold grey level 0<160<=255 (0 = autodetect)\n"
        " -d num    - dust_size (remove small clusters, -1 = autodetect)\n"
        " -s num    - spacewidth/dots (0 = autodetect)\n"
        " -v num    - verbose\n"
        " -c string - list of chars (debugging)\n"
        " -C string - char filter (ex. hexdigits: 0-9A-Fx, only ASCII)\n"
        " -m num    - operation modes (bitpattern)\n"
        " -a num    - value of certainty (in percent, 0..100, default=95)\n"
        " -u string - output this string for every unrecognized character\n"
        " examples:\n"
        "\tocrlayout -m 4 text1.pbm                   # do layout analyzis\n"
        "\tocrlayout -m 130 -p ./database/ text1.pbm  # extend database\n"
        "\n"
    )


def parse_arguments(argv: Sequence[str]) -> Options:
    """Parse arguments (without the program name) into Options.

    A value may follow its option directly (-v33) or as the next argument
    (-v 33).  After -f the argument following the format is consumed too.
    """
    options = Options()
    args = list(argv)
    if not args:
        options.action = Action.BANNER
        return options

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--help", "-h"):
            options.action = Action.HELP
            return options
        if arg in ("--version", "-V"):
            options.action = Action.VERSION
            return options
        if arg.startswith("-") and len(arg) > 1:
            skip = 0
            if len(arg) == 2 and i + 1 < len(args):
                value = args[i + 1]
                skip = 1
            elif len(arg) > 2:
                value = arg[2:]
            else:
                raise OptionError("missing argument, try --help")
            letter = arg[1]
            if letter == "i":
                options.fname = value
            elif letter == "e":
                options.error_file = value
            elif letter == "p":
                options.db_path = value
            elif letter == "o":
                options.output_file = None if value == "-" else value
            elif letter == "f":
                try:
                    options.out_format = OutputFormat(value)
                except ValueError:
                    options.warnings.append(f"unknown format (-f {value})")
                i += 1
            elif letter == "c":
                options.lc = value
            elif letter == "C":
                options.cfilter = value
            elif letter == "d":
                options.dust_size = _atoi(value)
            elif letter == "l":
                options.cs = _atoi(value)
            elif letter == "s":
                options.spc = _atoi(value)
            elif letter == "v":
                options.verbose |= _atoi(value)
            elif letter == "m":
                options.mode |= _atoi(value)
            elif letter == "n":
                options.only_numbers = _atoi(value)
            elif letter == "x":
                options.progress_file = value
            elif letter == "a":
                options.certainty = _atoi(value)
            elif letter == "u":
                options.unrec_marker = value
            else:
                raise OptionError(f"unknown option {arg}, use -h for help")
            i += skip + 1
            continue
        options.fname = arg
        i += 1
    return options


def apply_options(options: Options, job: Job) -> None:
    """Copy the given settings onto a job; verbose and mode bits are added."""
    cfg = job.cfg
    if options.fname is not None:
        job.fname = options.fname
    for name in (
        "db_path",
        "out_format",
        "lc",
        "cfilter",
        "dust_size",
        "cs",
        "spc",
        "only_numbers",
        "certainty",
        "unrec_marker",
    ):
        value = getattr(options, name)
        if value is not None:
            setattr(cfg, name, value)
    cfg.verbose |= options.verbose
    cfg.mode |= options.mode