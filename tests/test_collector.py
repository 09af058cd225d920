import os

import pytest

from secaudit.utils.collector import collect_files, is_scannable


def _relative(root, files):
    return [path.relative_to(root).as_posix() for path in files]


def test_collects_source_and_known_config_files(make_tree):
    root = make_tree(
        {
            "app.py": "print('hi')\n",
            "Dockerfile": "FROM python:3.12\n",
            "Makefile": "all:\n",
            ".env": "A=1\n",
            ".env.local": "B=2\n",
            ".gitignore": "node_modules\n",
            "README.md": "# docs\n",
            "logo.png": "not really an image",
            "bundle.min.js": "var a=1;",
        }
    )

    collected = _relative(root, collect_files(root))

    assert collected == [".env", ".env.local", ".gitignore", "Dockerfile", "Makefile", "app.py"]


def test_skip_dirs_and_hidden_dirs_are_pruned(make_tree):
    root = make_tree(
        {
            "node_modules/lib/index.js": "x",
            ".git/config": "x",
            ".hidden/secret.py": "x",
            "build/out.js": "x",
            "src/main.ts": "x",
        }
    )

    assert _relative(root, collect_files(root)) == ["src/main.ts"]


def test_depth_first_sorted_order(make_tree):
    root = make_tree({"c.py": "", "b.py": "", "a/z.py": "", "a/y/x.py": ""})

    assert _relative(root, collect_files(root)) == ["a/y/x.py", "a/z.py", "b.py", "c.py"]


def test_stops_at_max_files(make_tree):
    root = make_tree({f"dir{i}/file{j}.py": "" for i in range(5) for j in range(10)})

    files = collect_files(root, max_files=12)

    assert len(files) == 12
    assert collect_files(root, max_files=12) == files


def test_skips_oversized_files(make_tree):
    root = make_tree({"small.py": "x" * 10, "large.py": "x" * 2048})

    assert _relative(root, collect_files(root, max_file_size=1024)) == ["small.py"]


def test_depth_is_capped(make_tree):
    root = make_tree({"top.py": "", "a/b/c/deep.py": ""})

    assert _relative(root, collect_files(root, max_depth=2)) == ["top.py"]
    assert _relative(root, collect_files(root, max_depth=3)) == ["a/b/c/deep.py", "top.py"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_loops_and_broken_links_are_tolerated(make_tree):
    root = make_tree({"src/app.py": ""})
    os.symlink(root, root / "src" / "loop")
    os.symlink(root / "missing.py", root / "broken.py")

    assert _relative(root, collect_files(root)) == ["src/app.py"]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("index.tsx", True),
        ("settings.YAML", True),
        ("production.env", True),
        (".env.production", True),
        ("dockerfile", True),
        ("notes.txt", False),
        ("app.min.css", False),
        ("archive.tar.gz", False),
        ("yarn.lock", False),
    ],
)
def test_is_scannable(name, expected):
    assert is_scannable(name) is expected
