"""Fixtures for app-level tests: a small site on disk."""

import json
from pathlib import Path

import pytest

POSTS = {
    "ml/jan.md": ("Jan", "2024-01-01", "ml", "[x]"),
    "web/feb.mdx": ("Feb", "2024-02-01", "web", "[x, y]"),
}


def write_post(root: Path, rel: str, title: str, date: str, space: str, tags: str) -> None:
    path = root / "content" / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f'---\ntitle: {title}\ndate: "{date}"\ndescription: About {title}\ntags: {tags}\nspace: {space}\n---\n'
        f"Body of {title}.\n",
        encoding="utf-8",
    )


@pytest.fixture
def site_dir(tmp_path: Path, space_records) -> Path:
    (tmp_path / "spaces.json").write_text(json.dumps(space_records), encoding="utf-8")
    for rel, (title, date, space, tags) in POSTS.items():
        write_post(tmp_path, rel, title, date, space, tags)
    (tmp_path / "settings.toml").write_text(
        "[paths]\n"
        'content_dir = "content"\n'
        'spaces_file = "spaces.json"\n'
        'out_dir = "dist"\n'
        "\n[site]\n"
        'url = "https://example.org/blog"\n'
        'title = "Test Site"\n'
        'description = "A test site."\n'
        "\n[content]\n"
        'groups = ["blog", "ml", "web", "notes"]\n',
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def post_writer():
    return write_post
