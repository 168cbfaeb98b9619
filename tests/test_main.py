# tests/test_main.py
import pytest
import yaml

import main
import orchestration.cli_runner as cli_runner


@pytest.fixture
def story_file(tmp_path, monkeypatch, story_snapshot):
    monkeypatch.setattr(cli_runner, "setup_logging", lambda: None)
    path = tmp_path / "story.yaml"
    path.write_text(yaml.safe_dump(story_snapshot), encoding="utf-8")
    return str(path)


def test_formatted_chapter_context(story_file, capsys):
    exit_code = main.main([story_file, "--chapter", "2", "--format"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "<context>\n## Previous Content\n" in out
    assert out.rstrip().endswith("</context>")
    assert "The gate creaked open." in out
    assert "## Additional Information" not in out


def test_pins_become_additional_information(story_file, capsys):
    exit_code = main.main(
        [story_file, "--chapter", "2", "--format", "--pin", "keep tone wistful"]
    )

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "## Additional Information\nkeep tone wistful" in out


def test_item_table(story_file, capsys):
    exit_code = main.main([story_file, "--chapter", "3"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Selected context items" in out
    assert "5/5 items" in out


def test_summary_mode(story_file, capsys):
    exit_code = main.main([story_file, "--summary", "--format"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Story arcs: Into the Dark(active)" in out


def test_missing_chapter_exits_non_zero(story_file, capsys):
    exit_code = main.main([story_file, "--chapter", "99"])

    assert exit_code == 1
    assert "Chapter 99 not found" in capsys.readouterr().out


def test_unreadable_snapshot_exits_non_zero(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli_runner, "setup_logging", lambda: None)

    exit_code = main.main([str(tmp_path / "missing.yaml"), "--chapter", "1"])

    assert exit_code == 1
    assert "Could not load story snapshot" in capsys.readouterr().out


def test_invalid_snapshot_exits_non_zero(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_runner, "setup_logging", lambda: None)
    path = tmp_path / "bad.yaml"
    path.write_text("chapters:\n  - title: no id\n", encoding="utf-8")

    assert main.main([str(path), "--chapter", "1"]) == 1


def test_chapter_required_without_global_mode(story_file):
    with pytest.raises(SystemExit) as exc_info:
        main.main([story_file])
    assert exc_info.value.code == 2


def test_pinned_items_have_no_priority():
    items = cli_runner.pinned_items(["one", "two"])
    assert [i.id for i in items] == ["pin-1", "pin-2"]
    assert all(i.priority is None for i in items)
