import re

from imtools.mageutil.console import (
    COLOR_BLUE,
    COLOR_GREEN,
    COLOR_RED,
    COLOR_RESET,
    print_blue,
    print_blue_two_line,
    print_green,
    print_green_no_timestamp,
    print_green_to_stdout,
    print_green_two_line,
    print_red,
    print_red_no_timestamp,
    print_red_to_stderr,
)

_STAMP = r"\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} [^\]]*\]"


def _stamp_of(text):
    found = re.fullmatch(_STAMP, text)
    return found.group(0) if found else ""


def test_print_blue_has_timestamp_and_colour(capsys):
    print_blue("hello")
    out = capsys.readouterr().out
    prefix, separator, rest = out.partition(" " + COLOR_BLUE)
    assert separator == " " + COLOR_BLUE
    assert rest == "hello" + COLOR_RESET + "\n"
    assert _stamp_of(prefix) == prefix


def test_print_green_and_red_use_their_colours(capsys):
    print_green("ok")
    print_red("bad")
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].endswith(COLOR_GREEN + "ok" + COLOR_RESET)
    assert lines[1].endswith(COLOR_RED + "bad" + COLOR_RESET)
    prefix = lines[0][: -len(" " + COLOR_GREEN + "ok" + COLOR_RESET)]
    assert _stamp_of(prefix) == prefix


def test_two_line_variants_put_timestamp_on_its_own_line(capsys):
    print_blue_two_line("first")
    print_green_two_line("second")
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert _stamp_of(lines[0]) == lines[0]
    assert lines[1] == COLOR_BLUE + "first" + COLOR_RESET
    assert _stamp_of(lines[2]) == lines[2]
    assert lines[3] == COLOR_GREEN + "second" + COLOR_RESET


def test_no_timestamp_variants(capsys):
    print_red_no_timestamp("x")
    print_green_no_timestamp("y")
    out = capsys.readouterr().out
    assert out == COLOR_RED + "x" + COLOR_RESET + "\n" + COLOR_GREEN + "y" + COLOR_RESET + "\n"


def test_print_red_to_stderr_joins_values(capsys):
    written = print_red_to_stderr("a", 1, 2)
    err = capsys.readouterr().err
    assert err == "\033[31ma1 2\033[0m"
    assert written == len(err.encode("utf-8"))


def test_print_green_to_stdout_strings_are_not_spaced(capsys):
    written = print_green_to_stdout("ab", "cd")
    out = capsys.readouterr().out
    assert out == "\033[32mabcd\033[0m"
    assert written == len(out)