# tests/test_walker.py
import os
import stat
import sys
from pathlib import Path

import pytest

from snapcat import InvalidPathError, InvalidPatternError, SnapcatOptions, WalkError, Walker


def _make_file(p: Path, content: str = "x"):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


def _rels(root: Path, **kwargs):
    """Walk ``root`` and return the set of root-relative POSIX paths (root excluded)."""
    walker = Walker(SnapcatOptions(root=root, **kwargs))
    return {p.relative_to(root).as_posix() for p in walker.collect_entries() if p != root}


def test_root_is_yielded_first(tmp_path: Path):
    _make_file(tmp_path / "a.txt")
    items = list(Walker(SnapcatOptions(root=tmp_path)))
    assert items[0] == tmp_path
    assert tmp_path / "a.txt" in items


def test_walks_nested_directories(tmp_path: Path):
    _make_file(tmp_path / "src/pkg/mod.py")
    _make_file(tmp_path / "README.md")

    assert _rels(tmp_path) == {"src", "src/pkg", "src/pkg/mod.py", "README.md"}


def test_directory_precedes_its_contents(tmp_path: Path):
    _make_file(tmp_path / "a/b/c.txt")
    items = Walker(SnapcatOptions(root=tmp_path)).collect_entries()
    assert items.index(tmp_path / "a") < items.index(tmp_path / "a/b") < items.index(tmp_path / "a/b/c.txt")


def test_hidden_entries_excluded_by_default(tmp_path: Path):
    _make_file(tmp_path / ".env", "SECRET=1")
    _make_file(tmp_path / ".config/settings.toml")
    _make_file(tmp_path / "visible.txt")

    assert _rels(tmp_path) == {"visible.txt"}
    assert _rels(tmp_path, include_hidden=True) == {
        ".env",
        ".config",
        ".config/settings.toml",
        "visible.txt",
    }


def test_gitignore_rules_are_honored(tmp_path: Path):
    _make_file(tmp_path / ".gitignore", "*.tmp\nbuild/\n")
    _make_file(tmp_path / "keep.py")
    _make_file(tmp_path / "scratch.tmp")
    _make_file(tmp_path / "build/out.o")
    _make_file(tmp_path / "src/also.tmp")

    assert _rels(tmp_path) == {"keep.py", "src"}
    assert _rels(tmp_path, respect_gitignore=False) == {
        "keep.py",
        "scratch.tmp",
        "build",
        "build/out.o",
        "src",
        "src/also.tmp",
    }


def test_nested_gitignore_can_reinclude(tmp_path: Path):
    _make_file(tmp_path / ".gitignore", "*.log\n")
    _make_file(tmp_path / "sub/.gitignore", "!keep.log\n")
    _make_file(tmp_path / "top.log")
    _make_file(tmp_path / "sub/keep.log")
    _make_file(tmp_path / "sub/other.log")

    assert _rels(tmp_path) == {"sub", "sub/keep.log"}


def test_nested_gitignore_is_relative_to_its_directory(tmp_path: Path):
    _make_file(tmp_path / "sub/.gitignore", "/local.txt\n")
    _make_file(tmp_path / "local.txt")
    _make_file(tmp_path / "sub/local.txt")

    assert _rels(tmp_path) == {"local.txt", "sub"}


def test_git_info_exclude_is_honored(tmp_path: Path):
    _make_file(tmp_path / ".git/info/exclude", "secret.txt\n")
    _make_file(tmp_path / "secret.txt")
    _make_file(tmp_path / "public.txt")

    assert _rels(tmp_path) == {"public.txt"}


def test_glob_patterns_prune_directories(tmp_path: Path):
    _make_file(tmp_path / "vendor/lib/a.js")
    _make_file(tmp_path / "app.js")
    _make_file(tmp_path / "debug.log")
    _make_file(tmp_path / "logs/deep/trace.log")

    rels = _rels(tmp_path, ignore_patterns=["vendor", "*.log"])
    assert rels == {"app.js", "logs", "logs/deep"}


def test_glob_patterns_see_root_relative_paths(tmp_path: Path):
    _make_file(tmp_path / "build/x.o")
    _make_file(tmp_path / "src/build/y.o")

    rels = _rels(tmp_path, ignore_patterns=["build/*"])
    assert "build" in rels
    assert "build/x.o" not in rels
    assert "src/build/y.o" in rels


def test_max_depth_zero_yields_only_root(tmp_path: Path):
    _make_file(tmp_path / "a.txt")
    items = Walker(SnapcatOptions(root=tmp_path, max_depth=0)).collect_entries()
    assert items == [tmp_path]


def test_max_depth_bounds_entries(tmp_path: Path):
    _make_file(tmp_path / "a/b/c/d.txt")
    _make_file(tmp_path / "top.txt")

    assert _rels(tmp_path, max_depth=1) == {"a", "top.txt"}
    assert _rels(tmp_path, max_depth=2) == {"a", "a/b", "top.txt"}

    for p in Walker(SnapcatOptions(root=tmp_path, max_depth=2)).collect_entries():
        assert len(p.relative_to(tmp_path).parts) <= 2


@pytest.mark.skipif(sys.platform.startswith("win"), reason="Symlink creation needs privileges on Windows")
def test_symlinked_directory_is_a_leaf_unless_followed(tmp_path: Path):
    real = tmp_path / "real"
    _make_file(real / "inside.txt")
    (tmp_path / "linkdir").symlink_to(real, target_is_directory=True)

    rels = _rels(tmp_path)
    assert "linkdir" in rels
    assert "linkdir/inside.txt" not in rels

    rels = _rels(tmp_path, follow_links=True)
    assert "linkdir/inside.txt" in rels


@pytest.mark.skipif(sys.platform.startswith("win"), reason="Symlink creation needs privileges on Windows")
def test_symlink_loop_is_reported_in_band(tmp_path: Path):
    _make_file(tmp_path / "sub/a.txt")
    (tmp_path / "sub/back").symlink_to(tmp_path, target_is_directory=True)

    items = list(Walker(SnapcatOptions(root=tmp_path, follow_links=True)))
    errors = [i for i in items if isinstance(i, WalkError)]
    paths = [i for i in items if not isinstance(i, WalkError)]

    assert len(errors) == 1
    assert errors[0].path == tmp_path / "sub/back"
    assert tmp_path / "sub/a.txt" in paths


@pytest.mark.skipif(os.name != "posix", reason="Permission bits test is POSIX-only")
@pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root ignores permission bits")
def test_unreadable_directory_is_reported_in_band(tmp_path: Path):
    secret = tmp_path / "secret"
    _make_file(secret / "hidden.txt")
    _make_file(tmp_path / "zz.txt")

    secret.chmod(0)
    try:
        items = list(Walker(SnapcatOptions(root=tmp_path)))
        errors = [i for i in items if isinstance(i, WalkError)]
        assert len(errors) == 1
        assert errors[0].path == secret
        assert isinstance(errors[0].__cause__, PermissionError)
        # the walk carried on past the failure
        assert tmp_path / "zz.txt" in items

        with pytest.raises(WalkError):
            Walker(SnapcatOptions(root=tmp_path)).collect_entries()
    finally:
        secret.chmod(stat.S_IRWXU)


def test_missing_root_is_invalid_path(tmp_path: Path):
    with pytest.raises(InvalidPathError):
        Walker(SnapcatOptions(root=tmp_path / "missing"))


def test_file_root_is_invalid_path(tmp_path: Path):
    f = tmp_path / "file.txt"
    _make_file(f)
    with pytest.raises(InvalidPathError):
        Walker(SnapcatOptions(root=f))


def test_invalid_pattern_fails_before_walking(tmp_path: Path):
    with pytest.raises(InvalidPatternError):
        Walker(SnapcatOptions(root=tmp_path, ignore_patterns=["[oops"]))
