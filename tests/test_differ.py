from diff_verify.differ import diff_lines, has_changes, unified_diff


def test_identical_text_is_one_equal_region():
    regions = diff_lines("hello\nworld", "hello\nworld")
    assert [r.tag for r in regions] == ["equal"]
    assert not has_changes(regions)


def test_empty_inputs_have_no_regions_and_no_changes():
    assert diff_lines("", "") == []
    assert not has_changes(diff_lines("", ""))


def test_single_line_change():
    regions = diff_lines("hello\nworld", "hello\nmars")
    assert has_changes(regions)
    changed = [r for r in regions if r.changed]
    assert changed[0].old_lines == ("world",)
    assert changed[0].new_lines == ("mars",)


def test_insertions_and_deletions_are_changes():
    assert has_changes(diff_lines("a\n", "a\nb\n"))
    assert has_changes(diff_lines("a\nb\n", "a\n"))
    assert has_changes(diff_lines("", "a"))


def test_unified_diff_renders_mismatch():
    lines = unified_diff("hello\nworld", "hello\nmars", fromfile="out.txt.tmp", tofile="out.txt")
    assert lines[0] == "--- out.txt.tmp"
    assert lines[1] == "+++ out.txt"
    assert "-world" in lines
    assert "+mars" in lines
    assert unified_diff("same", "same", fromfile="a", tofile="b") == []
