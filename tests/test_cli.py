"""Tests for the command-line interface."""

from unittest.mock import patch

import pytest

from banglamuse.categories import CategoryId
from banglamuse.chains.fallback import get_fallback_text
from banglamuse.config import settings
from banglamuse.history import HistoryStore
from banglamuse.main import build_parser, main


@pytest.fixture
def history_file(tmp_path):
    """Point the CLI at a temporary history file."""
    path = tmp_path / "history.json"
    with patch.object(settings, "history_file", path):
        yield path


def _run(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestParser:
    """Test argument parsing."""

    def test_generate_defaults(self):
        args = build_parser().parse_args(["generate", "শরৎ"])

        assert args.topic == "শরৎ"
        assert args.category == "article"
        assert args.length == "medium"
        assert args.creativity is None

    def test_unknown_category_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate", "শরৎ", "--category", "drama"])

    def test_refine_sources_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["refine", "polish", "--history-id", "a", "--input", "b"])

    def test_speak_requires_output(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["speak", "--input", "a.txt"])


class TestGenerateCommand:
    """Test the generate command in offline mode."""

    def test_offline_generate_prints_fallback(self, history_file, capsys):
        """Without a credential the fallback text is printed and not recorded."""
        code = _run(["generate", "কাশফুল", "--category", "poetry"])

        assert code == 0
        assert capsys.readouterr().out.strip() == get_fallback_text(
            CategoryId.POETRY, "কাশফুল", False
        ).strip()
        assert HistoryStore(history_file).load() == []

    def test_style_file_adds_prefix(self, history_file, tmp_path):
        style = tmp_path / "style.txt"
        style.write_text("আমার লেখার ধরন", encoding="utf-8")
        output = tmp_path / "out.txt"

        code = _run(["generate", "নদী", "--style-file", str(style), "-o", str(output)])

        assert code == 0
        assert output.read_text(encoding="utf-8") == get_fallback_text(
            CategoryId.ARTICLE, "নদী", True
        )

    def test_blank_topic_fails(self, history_file):
        assert _run(["generate", "   "]) == 1


class TestRefineCommand:
    """Test the refine command."""

    def test_nothing_to_refine(self, history_file):
        assert _run(["refine", "shorten"]) == 1

    def test_refine_without_credential_fails(self, history_file, tmp_path):
        """Refinement has no offline fallback."""
        source = tmp_path / "draft.txt"
        source.write_text("পুরনো লেখা", encoding="utf-8")

        assert _run(["refine", "polish", "--input", str(source)]) == 1

    def test_unknown_history_id_fails(self, history_file):
        assert _run(["refine", "expand", "--history-id", "missing"]) == 1


class TestHistoryCommand:
    """Test history list/show/delete/clear."""

    def _seed(self, path):
        store = HistoryStore(path)
        first = store.add(CategoryId.ARTICLE, "প্রথম", "এক দুই")
        second = store.add(CategoryId.POETRY, "দ্বিতীয়", "তিন")
        return first, second

    def test_list(self, history_file, capsys):
        first, second = self._seed(history_file)

        code = _run(["history", "list"])

        lines = capsys.readouterr().out.strip().splitlines()
        assert code == 0
        assert lines[0].startswith(second.id)
        assert "কবিতা" in lines[0]
        assert lines[1].startswith(first.id)
        assert "(2 words)" in lines[1]

    def test_show(self, history_file, capsys):
        first, _ = self._seed(history_file)

        assert _run(["history", "show", first.id]) == 0
        assert capsys.readouterr().out.strip() == "এক দুই"

    def test_show_missing(self, history_file):
        assert _run(["history", "show", "missing"]) == 1

    def test_delete(self, history_file):
        first, second = self._seed(history_file)

        assert _run(["history", "delete", first.id]) == 0
        assert [item.id for item in HistoryStore(history_file).load()] == [second.id]

    def test_delete_missing(self, history_file):
        self._seed(history_file)

        assert _run(["history", "delete", "missing"]) == 1

    def test_clear(self, history_file):
        self._seed(history_file)

        assert _run(["history", "clear"]) == 0
        assert HistoryStore(history_file).load() == []
