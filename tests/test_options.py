import pytest

from ocrlayout.model import Job, OutputFormat
from ocrlayout.options import (
    Action,
    OptionError,
    Options,
    apply_options,
    parse_arguments,
    usage_text,
    version_text,
)


def test_no_arguments_shows_banner():
    assert parse_arguments([]).action is Action.BANNER


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_flags(flag):
    assert parse_arguments(["-v", "1", flag, "-q"]).action is Action.HELP


@pytest.mark.parametrize("flag", ["-V", "--version"])
def test_version_flags(flag):
    assert parse_arguments([flag]).action is Action.VERSION


def test_joined_and_separate_values_agree():
    joined = parse_arguments(["-l160", "-d10", "-a90", "img.pbm"])
    separate = parse_arguments(["-l", "160", "-d", "10", "-a", "90", "img.pbm"])
    assert joined == separate
    assert joined.cs == 160
    assert joined.fname == "img.pbm"


def test_verbose_and_mode_are_combined_bitwise():
    opts = parse_arguments(["-v", "1", "-v", "16", "-m", "2", "-m4"])
    assert opts.verbose == 17
    assert opts.mode == 6


def test_leading_digits_are_used():
    opts = parse_arguments(["-s", "12px", "-n", "abc"])
    assert opts.spc == 12
    assert opts.only_numbers == 0


def test_dash_alone_is_filename():
    opts = parse_arguments(["-"])
    assert opts.action is Action.RUN
    assert opts.fname == "-"


def test_input_option_sets_filename():
    assert parse_arguments(["-i", "page.pgm"]).fname == "page.pgm"


def test_format_consumes_following_argument():
    opts = parse_arguments(["-f", "XML", "skipped.pbm"])
    assert opts.out_format is OutputFormat.XML
    assert opts.fname is None
    opts = parse_arguments(["-f", "TeX", "skipped.pbm", "real.pbm"])
    assert opts.out_format is OutputFormat.TEX
    assert opts.fname == "real.pbm"


def test_unknown_format_gives_warning():
    opts = parse_arguments(["-f", "Klingon"])
    assert opts.out_format is None
    assert any("Klingon" in w for w in opts.warnings)


def test_unknown_option_raises():
    with pytest.raises(OptionError, match="unknown option -z"):
        parse_arguments(["-z", "1"])


def test_missing_argument_raises():
    with pytest.raises(OptionError, match="missing argument"):
        parse_arguments(["img.pbm", "-l"])


def test_output_dash_means_stdout():
    assert parse_arguments(["-o", "-"]).output_file is None
    assert parse_arguments(["-o", "out.txt"]).output_file == "out.txt"


def test_string_options():
    opts = parse_arguments(
        ["-c", "ab", "-C", "0-9", "-u", "?", "-p", "./db/", "-e", "log", "-x", "fifo"]
    )
    assert (opts.lc, opts.cfilter, opts.unrec_marker) == ("ab", "0-9", "?")
    assert (opts.db_path, opts.error_file, opts.progress_file) == ("./db/", "log", "fifo")


def test_apply_options_sets_only_given_values():
    job = Job()
    job.cfg.verbose = 1
    apply_options(parse_arguments(["-l", "140", "-v", "16", "-f", "HTML"]), job)
    assert job.cfg.cs == 140
    assert job.cfg.verbose == 17
    assert job.cfg.out_format is OutputFormat.HTML
    assert job.cfg.certainty == 95
    assert job.cfg.dust_size == -1
    assert job.fname == "-"


def test_apply_empty_options_keeps_defaults():
    job = Job()
    apply_options(Options(), job)
    assert job.cfg == Job().cfg


def test_usage_contains_banner_and_options():
    text = usage_text()
    assert text.startswith(version_text())
    assert "-f fmt" in text
    assert "0.54" in version_text()