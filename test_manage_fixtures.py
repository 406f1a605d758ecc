import pytest
from manage_fixtures import check_fixtures, iter_fixtures, process_fixtures


@pytest.fixture
def fixtures_dir(tmp_path):
    good = tmp_path / "good_case"
    good.mkdir()
    (good / "diff").write_bytes(b"--- a/f\r\n+++ b/f\r\n@@ -1,3 +1,3 @@\r\n-a\r\n+b\r\n")
    (good / "expected").write_bytes(b"--- a/f\n+++ b/f\n@@ -1,1 +1,1 @@\n-a\n+b\n")

    stale = tmp_path / "stale_case"
    stale.mkdir()
    (stale / "diff").write_text("--- a/f\n+++ b/f\n@@ -1 +1 @@\nkeep\n")
    (stale / "expected").write_text("outdated\n")

    (tmp_path / "no_diff_here").mkdir()
    (tmp_path / "README").write_text("not a fixture\n")
    return tmp_path


def test_iter_fixtures_only_yields_dirs_with_diff(fixtures_dir):
    names = [path.name for path in iter_fixtures(fixtures_dir)]
    assert names == ["good_case", "stale_case"]


def test_iter_fixtures_filter_is_case_insensitive(fixtures_dir):
    names = [path.name for path in iter_fixtures(fixtures_dir, "STALE")]
    assert names == ["stale_case"]


def test_check_fixtures(fixtures_dir, capsys):
    passed, failed = check_fixtures(fixtures_dir)
    assert passed == ["good_case"]
    assert failed == ["stale_case"]
    assert "1/2 fixtures passed" in capsys.readouterr().out


def test_check_fixtures_debug_shows_output(fixtures_dir, capsys):
    check_fixtures(fixtures_dir, filter_name="stale", debug=True)
    out = capsys.readouterr().out
    assert "DEBUG INFO for stale_case" in out
    assert " keep" in out


def test_process_skips_existing_without_force(fixtures_dir):
    processed, skipped = process_fixtures(fixtures_dir)
    assert (processed, skipped) == (0, 2)
    assert (fixtures_dir / "stale_case" / "expected").read_text() == "outdated\n"


def test_process_force_rewrites_expected(fixtures_dir):
    processed, skipped = process_fixtures(fixtures_dir, force=True)
    assert (processed, skipped) == (2, 0)
    assert (fixtures_dir / "stale_case" / "expected").read_bytes() == (
        b"--- a/f\n+++ b/f\n@@ -1,1 +1,1 @@\n keep\n"
    )
    _, failed = check_fixtures(fixtures_dir)
    assert failed == []
