import click

from diff_verify.log_sink import ConsoleSink, MemorySink, format_line


def test_format_line_pads_label_column():
    line = format_line("emit", "node gen.js", color=False)
    assert line == "[emit]    node gen.js"
    assert format_line("unknown-prefix", "x", color=False) == "[unknown-prefix] x"


def test_format_line_colours_known_labels():
    line = format_line("error", "boom")
    assert click.unstyle(line) == "[error]   boom"
    assert line != click.unstyle(line)


def test_console_sink_routes_errors_to_stderr(capsys):
    sink = ConsoleSink()
    sink.emit("rename", '"a" -> "a.tmp"')
    sink.emit("error", "bad")
    out, err = capsys.readouterr()
    assert '"a" -> "a.tmp"' in out
    assert "bad" in err
    assert "bad" not in out


def test_memory_sink_records_in_order():
    sink = MemorySink()
    sink.emit("rename", "1")
    sink.emit("error", "2")
    sink.emit("rename", "3")
    assert sink.prefixes == ["rename", "error", "rename"]
    assert sink.with_prefix("rename") == ["1", "3"]
