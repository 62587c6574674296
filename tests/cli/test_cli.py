"""Tests for the site-content CLI."""

import json

import pytest
from typer.testing import CliRunner

from site_content import __version__
from site_content.cli.commands.new import build_front_matter
from site_content.cli.main import app
from site_content.markdown import ContentParser, parse_date


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_scan(runner, sample_site):
    result = runner.invoke(app, ["scan", str(sample_site)])
    assert result.exit_code == 0, result.output
    assert "3 content records" in result.output
    assert "Hugo" in result.output


def test_scan_uses_content_dir_option(runner, sample_site):
    result = runner.invoke(app, ["--content-dir", str(sample_site), "scan"])
    assert result.exit_code == 0, result.output
    assert "3 content records" in result.output


def test_scan_lists_failed_files(runner, sample_site, write_content):
    write_content("posts/broken.md", '+++\ntitle = "Broken"\n')
    result = runner.invoke(app, ["scan", str(sample_site)])
    assert result.exit_code == 0
    assert "1 files could not be parsed" in result.output
    assert "broken.md" in result.output


def test_scan_missing_directory(runner, tmp_path):
    result = runner.invoke(app, ["scan", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_check_clean(runner, sample_site):
    result = runner.invoke(app, ["check", str(sample_site)])
    assert result.exit_code == 0, result.output
    assert "No problems found" in result.output


def test_check_parse_errors_fail(runner, sample_site, write_content):
    write_content("posts/broken.md", '+++\ntitle = "Broken"\n')
    result = runner.invoke(app, ["check", str(sample_site)])
    assert result.exit_code == 1
    assert "Parse errors" in result.output
    assert "broken.md" in result.output


def test_check_shared_titles_only_warn(runner, sample_site, write_content):
    write_content("posts/hugo-draft.md", '+++\ntitle = "Hugo"\ndate = "2019-03-01"\n+++\n\nDraft.\n')
    result = runner.invoke(app, ["check", str(sample_site)])
    assert result.exit_code == 0, result.output
    assert "Shared titles" in result.output


def test_check_location_collision_fails(runner, sample_site, write_content):
    write_content("posts/Hugo.md", '+++\ntitle = "Hugo again"\ndate = "2019-03-01"\n+++\n')
    result = runner.invoke(app, ["check", str(sample_site)])
    assert result.exit_code == 1
    assert "Duplicate published locations" in result.output


def test_show(runner, sample_site):
    result = runner.invoke(app, ["--content-dir", str(sample_site), "show", "posts/hugo.md"])
    assert result.exit_code == 0, result.output
    assert "Hugo" in result.output
    assert "static-sites" in result.output
    assert "permalink" in result.output


def test_show_missing_file(runner, sample_site):
    result = runner.invoke(app, ["--content-dir", str(sample_site), "show", "posts/none.md"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_export_to_file(runner, sample_site, tmp_path):
    output = tmp_path / "records.jsonl"
    result = runner.invoke(app, ["export", str(sample_site), "--output", str(output)])
    assert result.exit_code == 0, result.output

    entries = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
    assert [e["path"] for e in entries] == [
        "posts/react-hooks.md",
        "posts/hugo.md",
        "projects/nes.md",
    ]


def test_new(runner, content_dir):
    result = runner.invoke(
        app,
        [
            "--content-dir",
            str(content_dir),
            "new",
            "Writing an NES emulator",
            "--tag",
            "rust",
            "--tag",
            "emulation",
            "--description",
            "Six months of 6502",
        ],
    )
    assert result.exit_code == 0, result.output

    path = content_dir / "posts" / "writing-an-nes-emulator.md"
    assert path.exists()

    record = ContentParser(content_dir).parse_file(path)
    assert record.title == "Writing an NES emulator"
    assert record.tags == ["rust", "emulation"]
    assert record.description == "Six months of 6502"
    assert record.body == ""
    assert parse_date(record.date).tzinfo is not None
    assert "draft" not in record.metadata


def test_new_refuses_overwrite(runner, content_dir):
    args = ["--content-dir", str(content_dir), "new", "Chat client", "--section", "projects"]
    assert runner.invoke(app, args).exit_code == 0
    assert (content_dir / "projects" / "chat-client.md").exists()

    result = runner.invoke(app, args)
    assert result.exit_code == 1
    assert "Refusing to overwrite" in result.output


def test_new_draft(runner, content_dir):
    result = runner.invoke(app, ["--content-dir", str(content_dir), "new", "Later", "--draft"])
    assert result.exit_code == 0, result.output
    record = ContentParser(content_dir).parse_file("posts/later.md")
    assert record.metadata["draft"] is True


def test_new_title_without_slug(runner, content_dir):
    result = runner.invoke(app, ["--content-dir", str(content_dir), "new", "!!!"])
    assert result.exit_code == 1
    assert "Cannot derive a file name" in result.output


def test_build_front_matter_order():
    from datetime import datetime, timezone

    now = datetime(2019, 3, 6, 0, 57, 32, tzinfo=timezone.utc)
    metadata = build_front_matter("Hugo", tags=["go"], now=now)
    assert metadata == {"title": "Hugo", "date": "2019-03-06T00:57:32+00:00", "tags": ["go"]}


def test_scan_with_scalar_tags(runner, sample_site, write_content):
    write_content("posts/odd.md", '+++\ntitle = "Odd"\ndate = "2020-01-01"\ntags = 5\n+++\n')
    result = runner.invoke(app, ["scan", str(sample_site)])
    assert result.exit_code == 0, result.output
    assert "1 files could not be parsed" in result.output
    assert "odd.md" in result.output


@pytest.mark.parametrize(
    "title,filename",
    [("Node.js tips", "node-js-tips.md"), ("Rust 1.0 released", "rust-1-0-released.md")],
)
def test_new_title_with_dots(runner, content_dir, title, filename):
    result = runner.invoke(app, ["--content-dir", str(content_dir), "new", title])
    assert result.exit_code == 0, result.output

    path = content_dir / "posts" / filename
    assert path.exists()
    assert ContentParser(content_dir).parse_file(path).title == title


def test_new_backslash_description_round_trips(runner, content_dir):
    description = r"Printing \x41 from 6502 assembly"
    result = runner.invoke(
        app, ["--content-dir", str(content_dir), "new", "Bytes", "--description", description]
    )
    assert result.exit_code == 0, result.output
    assert ContentParser(content_dir).parse_file("posts/bytes.md").description == description
