import pytest
from diff_lines import DiffConfig, LineKind, classify_line, classify_lines, join_lines


@pytest.mark.parametrize(
    "line,kind",
    [
        ("diff --git a/x.py b/x.py", LineKind.GIT_HEADER),
        ("@@ -1,2 +1,3 @@ def f():", LineKind.HUNK_HEADER),
        ("@@ ... @@", LineKind.HUNK_HEADER),
        ("@@-1,2 +1,3 @@", LineKind.HUNK_FRAGMENT),
        ("@decorator", LineKind.HUNK_FRAGMENT),
        ("--- a/x.py", LineKind.OLD_FILE_MARKER),
        ("+++ b/x.py", LineKind.NEW_FILE_MARKER),
        ("---", LineKind.DELETION),
        ("+++", LineKind.ADDITION),
        ("-removed", LineKind.DELETION),
        ("+added", LineKind.ADDITION),
        (" kept", LineKind.CONTEXT),
        (" ", LineKind.CONTEXT),
        ("", LineKind.BLANK),
        ("\t  ", LineKind.BLANK),
        ("index 83db48f..bf269f4 100644", LineKind.METADATA),
        ("new file mode 100644", LineKind.METADATA),
        ("deleted file mode 100644", LineKind.METADATA),
        ("similarity index 90%", LineKind.METADATA),
        ("rename from a.py", LineKind.METADATA),
        ("Binary files a/x.png and b/x.png differ", LineKind.METADATA),
        ("\\ No newline at end of file", LineKind.METADATA),
        ("diff -u a b", LineKind.METADATA),
        ("return value", LineKind.UNCLASSIFIED),
        ("differs", LineKind.UNCLASSIFIED),
        ("\tindented with tab", LineKind.UNCLASSIFIED),
    ],
)
def test_classify_line(line, kind):
    assert classify_line(line) is kind


def test_custom_metadata_prefixes():
    assert classify_line("Signed-off-by: me") is LineKind.UNCLASSIFIED
    prefixes = DiffConfig.METADATA_PREFIXES + ("Signed-off-by:",)
    assert classify_line("Signed-off-by: me", prefixes) is LineKind.METADATA


def test_file_markers_count_as_changes_inside_a_hunk():
    assert LineKind.OLD_FILE_MARKER.counts_old
    assert not LineKind.OLD_FILE_MARKER.counts_new
    assert LineKind.NEW_FILE_MARKER.counts_new
    assert LineKind.CONTEXT.counts_old and LineKind.CONTEXT.counts_new
    assert not LineKind.METADATA.counts_old and not LineKind.METADATA.counts_new


def test_change_kinds():
    changes = {kind for kind in LineKind if kind.is_change}
    assert changes == {
        LineKind.ADDITION,
        LineKind.DELETION,
        LineKind.OLD_FILE_MARKER,
        LineKind.NEW_FILE_MARKER,
    }


def test_section_starts():
    starts = {kind for kind in LineKind if kind.starts_section}
    assert starts == {LineKind.GIT_HEADER, LineKind.HUNK_HEADER}


def test_classify_lines_splits_on_lf_only():
    lines = classify_lines("a\x0bb\n c\n")
    assert [line.text for line in lines] == ["a\x0bb", " c", ""]
    assert [line.number for line in lines] == [1, 2, 3]
    assert join_lines(lines) == "a\x0bb\n c\n"
