# tests/test_output.py
import json
from pathlib import Path

import pytest

from snapcat import FileEntry, FileIOError, OutputFormat, SnapcatResult, format_result, write_result_to_file
from snapcat.output import format_entry_json, language_from_extension


def _result():
    return SnapcatResult(
        tree=".  # proj\n├── main.py\n├── notes.txt",
        files=[
            FileEntry(path=Path("proj/main.py"), content="print('x')\n", is_binary=False, size=11),
            FileEntry(path=Path("proj/notes.txt"), content="no newline", is_binary=False),
        ],
    )


def test_markdown_layout():
    out = format_result(_result(), OutputFormat.MARKDOWN)
    assert out == (
        "```\n.  # proj\n├── main.py\n├── notes.txt\n```\n"
        "## proj/main.py\n\n```python\nprint('x')\n```\n"
        "## proj/notes.txt\n\n```text\nno newline\n```\n"
    )


def test_text_layout():
    out = format_result(_result(), "text")
    assert out.startswith("Directory Tree:\n.  # proj\n")
    assert "\n\nFiles:\n" in out
    assert "\n--- proj/main.py ---\nprint('x')\n" in out
    assert out.endswith("--- proj/notes.txt ---\nno newline\n")


def test_json_layout_omits_missing_size():
    data = json.loads(format_result(_result(), OutputFormat.JSON))
    assert data["tree"].startswith(".  # proj")
    assert data["files"][0] == {
        "path": "proj/main.py",
        "content": "print('x')\n",
        "is_binary": False,
        "size": 11,
    }
    assert "size" not in data["files"][1]


def test_json_pretty_is_indented():
    compact = format_result(_result(), OutputFormat.JSON)
    pretty = format_result(_result(), OutputFormat.JSON, pretty=True)
    assert "\n" not in compact
    assert "\n  " in pretty
    assert json.loads(compact) == json.loads(pretty)


def test_entry_json_is_single_line():
    entry = FileEntry(path=Path("a.txt"), content="x\ny", is_binary=False)
    line = format_entry_json(entry)
    assert "\n" not in line
    assert json.loads(line)["content"] == "x\ny"


@pytest.mark.parametrize(
    "ext, lang",
    [("rs", "rust"), ("py", "python"), ("yml", "yaml"), ("hpp", "cpp"), ("kts", "kotlin"), ("xyz", ""), ("", "")],
)
def test_language_from_extension(ext, lang):
    assert language_from_extension(ext) == lang


def test_format_extensions():
    assert [f.extension for f in OutputFormat] == ["md", "txt", "json"]


def test_write_result_to_file(tmp_path: Path):
    target = tmp_path / "out.md"
    write_result_to_file(_result(), OutputFormat.MARKDOWN, target)
    assert target.read_text(encoding="utf-8") == format_result(_result(), OutputFormat.MARKDOWN)


def test_write_result_to_missing_dir_raises(tmp_path: Path):
    with pytest.raises(FileIOError):
        write_result_to_file(_result(), OutputFormat.JSON, tmp_path / "no/such/dir/out.json")
