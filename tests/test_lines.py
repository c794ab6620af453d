import io

from txtproc.lines import read_lines


def test_lines_keep_terminators():
    assert list(read_lines(io.StringIO("a\nb\n"))) == ["a\n", "b\n"]


def test_last_line_without_newline_is_kept():
    assert list(read_lines(io.StringIO("first\nlast"))) == ["first\n", "last"]


def test_empty_stream_yields_nothing():
    assert list(read_lines(io.StringIO(""))) == []


def test_blank_lines_are_yielded():
    assert list(read_lines(io.StringIO("\n\n"))) == ["\n", "\n"]


def test_long_line_is_not_split():
    text = "x" * 10000 + "\n"
    lines = list(read_lines(io.StringIO(text)))
    assert lines == [text]


def test_bytes_stream():
    assert list(read_lines(io.BytesIO(b"1 2 3\n4"))) == [b"1 2 3\n", b"4"]


def test_joined_lines_round_trip():
    text = "alpha\nbeta\n\ngamma"
    assert "".join(read_lines(io.StringIO(text))) == text