"""Unit tests for the filesystem content source."""

from pathlib import Path

import pytest

from confero.adapters.content.filesystem import FilesystemContentSource
from confero.adapters.content.text_loader import TextLoader, UnreadableContent
from confero.aggregator import ContentAggregator
from confero.domain.errors import ContentValidationFailed


def _write(root: Path, rel: str, text: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _post_text(title="T", date="2024-01-01", space="ml", tags="[x]"):
    return f'---\ntitle: {title}\ndate: "{date}"\ndescription: About {title}\ntags: {tags}\nspace: {space}\n---\nBody of {title}\n'


class TestFilesystemContentSource:
    def test_reads_md_and_mdx_in_group_then_name_order(self, tmp_path):
        _write(tmp_path, "web/b.md", _post_text("B", space="web"))
        _write(tmp_path, "ml/z.mdx", _post_text("Z"))
        _write(tmp_path, "ml/a.md", _post_text("A"))
        _write(tmp_path, "ml/notes.txt", "ignored")

        src = FilesystemContentSource(content_dir=tmp_path, group_names=("ml", "web"))
        entries = src.read_all()

        assert [(e.group, e.name) for e in entries] == [("ml", "a"), ("ml", "z"), ("web", "b")]
        assert entries[0].frontmatter["title"] == "A"
        assert entries[0].body == "Body of A\n"
        assert entries[0].source.endswith("a.md")

    def test_hidden_and_underscore_files_are_skipped(self, tmp_path):
        _write(tmp_path, "ml/.hidden.md", _post_text())
        _write(tmp_path, "ml/_partial.mdx", _post_text())
        _write(tmp_path, "ml/_drafts/wip.md", _post_text())
        _write(tmp_path, "ml/real.md", _post_text())

        entries = FilesystemContentSource(content_dir=tmp_path, group_names=("ml",)).read_all()

        assert [e.name for e in entries] == ["real"]

    def test_missing_group_directory_yields_nothing(self, tmp_path, caplog):
        src = FilesystemContentSource(content_dir=tmp_path, group_names=("transformers",))

        with caplog.at_level("WARNING"):
            assert src.read_all() == []

        assert "transformers" in caplog.text

    def test_result_order_is_independent_of_worker_count(self, tmp_path):
        for g in ("blog", "ml", "web", "notes"):
            for n in ("c", "a", "b"):
                _write(tmp_path, f"{g}/{g}-{n}.md", _post_text(n, space=g))
        groups = ("blog", "ml", "web", "notes")

        serial = FilesystemContentSource(content_dir=tmp_path, group_names=groups, max_workers=1).read_all()
        parallel = FilesystemContentSource(content_dir=tmp_path, group_names=groups, max_workers=8).read_all()

        assert [e.source for e in serial] == [e.source for e in parallel]

    def test_bad_yaml_becomes_a_parse_error(self, tmp_path):
        _write(tmp_path, "ml/broken.md", "---\ntitle: [oops\n---\nbody")

        (entry,) = FilesystemContentSource(content_dir=tmp_path, group_names=("ml",)).read_all()

        assert entry.parse_error is not None
        assert entry.frontmatter == {}

    def test_feeds_the_aggregator_end_to_end(self, tmp_path, catalog):
        _write(tmp_path, "ml/jan.md", _post_text("Jan", "2024-01-01", "ml", "[x]"))
        _write(tmp_path, "web/feb.md", _post_text("Feb", "2024-02-01", "web", "[x, y]"))

        src = FilesystemContentSource(content_dir=tmp_path, group_names=("ml", "web"))
        posts = ContentAggregator(source=src, catalog=catalog).load_all()

        assert [p.id for p in posts] == ["feb", "jan"]
        assert posts[0].tags == ("x", "y")

    @pytest.mark.parametrize("bad_date", ["2024-13-01", "2024-02-30"])
    def test_impossible_date_names_the_post_and_field(self, tmp_path, catalog, bad_date):
        _write(tmp_path, "ml/bad.md", f"---\ntitle: Bad\ndate: {bad_date}\ndescription: d\ntags: [x]\nspace: ml\n---\n")
        src = FilesystemContentSource(content_dir=tmp_path, group_names=("ml",))

        with pytest.raises(ContentValidationFailed) as exc:
            ContentAggregator(source=src, catalog=catalog).load_all()

        assert exc.value.errors[0].field == "date"
        assert "bad.md" in str(exc.value)

    def test_unquoted_date_loads(self, tmp_path, catalog):
        _write(tmp_path, "ml/ok.md", "---\ntitle: Ok\ndate: 2024-02-29\ndescription: d\ntags: [x]\nspace: ml\n---\n")
        src = FilesystemContentSource(content_dir=tmp_path, group_names=("ml",))

        (post,) = ContentAggregator(source=src, catalog=catalog).load_all()

        assert post.date.isoformat() == "2024-02-29"

    def test_unreadable_file_fails_the_load(self, tmp_path, catalog):
        (tmp_path / "ml").mkdir()
        (tmp_path / "ml" / "binary.md").write_bytes(b"\x00\x01\x02")

        src = FilesystemContentSource(content_dir=tmp_path, group_names=("ml",))

        with pytest.raises(ContentValidationFailed, match="binary"):
            ContentAggregator(source=src, catalog=catalog).load_all()


class TestTextLoader:
    def test_rejects_oversized_files(self, tmp_path):
        path = _write(tmp_path, "big.md", "x" * 100)

        with pytest.raises(UnreadableContent, match="limit"):
            TextLoader(max_bytes=10).load(path)

    def test_rejects_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin.md"
        path.write_bytes("café".encode("latin-1"))

        with pytest.raises(UnreadableContent, match="utf-8"):
            TextLoader().load(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(UnreadableContent):
            TextLoader().load(tmp_path / "nope.md")
