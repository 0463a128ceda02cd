"""Tests for file discovery and the command-line driver."""

import logging

import pytest

from source_translator.core.discovery import discover_files
from source_translator.core.translation import RunOptions
from source_translator.main import build_parser, run


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src" / "components").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "src" / "index.ts").write_text('export const a = "こんにちは";\n', encoding="utf-8")
    (tmp_path / "src" / "components" / "App.tsx").write_text(
        "export const App = () => <p>テスト</p>;\n", encoding="utf-8"
    )
    (tmp_path / "src" / "broken.js").write_text('const = "エラー";\n', encoding="utf-8")
    (tmp_path / "src" / "tool.py").write_text('# コメント\n', encoding="utf-8")
    (tmp_path / "src" / "README.md").write_text("# テスト\n", encoding="utf-8")
    (tmp_path / "node_modules" / "lib" / "index.js").write_text('"こんにちは";\n', encoding="utf-8")
    return tmp_path


class TestDiscoverFiles:

    def test_default_extensions_and_exclusions(self, project):
        found = [p.relative_to(project).as_posix() for p in discover_files([project])]
        assert found == ["src/broken.js", "src/index.ts", "src/components/App.tsx"]

    def test_extension_filter(self, project):
        found = [p.name for p in discover_files([project], extensions=["py"])]
        assert found == ["tool.py"]

    def test_explicit_file_and_duplicates(self, project):
        index = project / "src" / "index.ts"
        found = list(discover_files([index, project / "src"]))
        assert found.count(index) == 1
        assert found[0] == index

    def test_missing_path_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            assert list(discover_files([tmp_path / "missing"])) == []
        assert "Path not found" in caplog.text


class TestBuildParser:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.paths == []
        assert not args.dry_run
        assert args.extensions is None
        assert args.model is None

    def test_flags(self):
        args = build_parser().parse_args(["-d", "--ext", ".py", "--ext", ".html", "--model", "gpt-4o", "src"])
        assert args.dry_run
        assert args.extensions == [".py", ".html"]
        assert args.model == "gpt-4o"
        assert args.paths == ["src"]


class TestRun:

    @pytest.mark.asyncio
    async def test_run_continues_past_failures(self, project, fake_translator):
        summary = await run([str(project)], RunOptions(), fake_translator)

        assert summary.files == 3
        assert summary.written == 2
        assert summary.failed == 1
        assert summary.skipped == 0
        assert "こんにちは" not in (project / "src" / "index.ts").read_text(encoding="utf-8")
        assert (project / "src" / "broken.js").read_text(encoding="utf-8") == 'const = "エラー";\n'
        assert (project / "node_modules" / "lib" / "index.js").read_text(encoding="utf-8") == '"こんにちは";\n'

    @pytest.mark.asyncio
    async def test_dry_run_writes_nothing(self, project, fake_translator):
        before = (project / "src" / "index.ts").read_text(encoding="utf-8")
        summary = await run([str(project)], RunOptions(dry_run=True), fake_translator)

        assert summary.written == 0
        assert (project / "src" / "index.ts").read_text(encoding="utf-8") == before

    @pytest.mark.asyncio
    async def test_unreadable_file_is_skipped(self, project, fake_translator):
        (project / "src" / "binary.ts").write_bytes(b"\xff\xfe\x00bad")
        summary = await run([str(project)], RunOptions(), fake_translator)

        assert summary.skipped == 1
        assert summary.files == 4
