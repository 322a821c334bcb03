"""
Tests for the command line interface.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typer.testing import CliRunner

from bookproject import cli, decorators
from bookproject.cli import app
from bookproject.library_db import Library


runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep config reads and writes inside a temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


@pytest.fixture
def library_path():
    """Path of an initialized, empty library."""
    temp_dir = tempfile.mkdtemp()
    lib = Library.open(Path(temp_dir))
    lib.close()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def populated_library(library_path):
    lib = Library.open(library_path)
    lib.add_book("Dune", shelf="To read", author="Frank Herbert")
    lib.add_book("Emma", shelf="Reading", author="Jane Austen")
    lib.add_book("Beloved", shelf="Read")
    lib.close()
    return library_path


def _book_id(library_path: Path, title: str) -> int:
    lib = Library.open(library_path)
    try:
        return lib.book_service.find_by_title(title)[0].id
    finally:
        lib.close()


class TestInitCommand:
    """Tests for the init command."""

    def test_init_creates_library(self, tmp_path):
        target = tmp_path / "books"

        result = runner.invoke(app, ["init", str(target)])

        assert result.exit_code == 0
        assert "Library initialized" in result.stdout
        assert "Did not finish" in result.stdout
        assert (target / "library.db").exists()


class TestBookCommands:
    """Tests for add, list, move, rename and remove."""

    def test_add_book(self, library_path):
        result = runner.invoke(app, [
            "add", "Dune", str(library_path), "--author", "Frank Herbert", "--shelf", "reading"
        ])

        assert result.exit_code == 0
        assert "Added 'Dune'" in result.stdout
        assert "Reading" in result.stdout

    def test_add_book_unknown_shelf_fails(self, library_path):
        result = runner.invoke(app, ["add", "Dune", str(library_path), "--shelf", "Too read"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_add_book_missing_library_fails(self, tmp_path):
        result = runner.invoke(app, ["add", "Dune", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Library not found" in result.stdout

    def test_list_all_books(self, populated_library):
        result = runner.invoke(app, ["list", str(populated_library)])

        assert result.exit_code == 0
        for title in ["Dune", "Emma", "Beloved"]:
            assert title in result.stdout
        assert "3 books" in result.stdout

    def test_list_one_shelf(self, populated_library):
        result = runner.invoke(app, ["list", str(populated_library), "--shelf", "READING"])

        assert result.exit_code == 0
        assert "Emma" in result.stdout
        assert "Dune" not in result.stdout

    def test_list_empty_shelf(self, populated_library):
        result = runner.invoke(app, ["list", str(populated_library), "--shelf", "did not finish"])

        assert result.exit_code == 0
        assert "No books found" in result.stdout

    def test_list_unknown_shelf_fails(self, populated_library):
        result = runner.invoke(app, ["list", str(populated_library), "--shelf", "Shelf"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_move_book(self, populated_library):
        book_id = _book_id(populated_library, "Dune")

        result = runner.invoke(app, ["move", str(book_id), str(populated_library), "--shelf", "read"])

        assert result.exit_code == 0
        lib = Library.open(populated_library)
        try:
            assert {b.title for b in lib.books_in_shelf("Read")} == {"Dune", "Beloved"}
        finally:
            lib.close()

    def test_move_missing_book_fails(self, populated_library):
        result = runner.invoke(app, ["move", "999", str(populated_library), "--shelf", "read"])

        assert result.exit_code == 1
        assert "Book 999 not found" in result.stdout

    def test_rename_book(self, populated_library):
        book_id = _book_id(populated_library, "Emma")

        result = runner.invoke(app, ["rename", str(book_id), str(populated_library), "--title", "Persuasion"])

        assert result.exit_code == 0
        assert "Persuasion" in result.stdout

    def test_remove_book(self, populated_library):
        book_id = _book_id(populated_library, "Beloved")

        result = runner.invoke(app, ["remove", str(book_id), str(populated_library), "--yes"])

        assert result.exit_code == 0
        assert "Removed 'Beloved'" in result.stdout

    def test_remove_book_cancelled(self, populated_library):
        book_id = _book_id(populated_library, "Beloved")

        result = runner.invoke(app, ["remove", str(book_id), str(populated_library)], input="n\n")

        assert result.exit_code == 0
        assert "cancelled" in result.stdout


class TestShelfCommands:
    """Tests for shelves, stats and custom shelf commands."""

    def test_shelves(self, populated_library):
        result = runner.invoke(app, ["shelves", str(populated_library)])

        assert result.exit_code == 0
        for name in ["To read", "Reading", "Read", "Did not finish"]:
            assert name in result.stdout

    def test_stats(self, populated_library):
        result = runner.invoke(app, ["stats", str(populated_library)])

        assert result.exit_code == 0
        assert "Total books: 3" in result.stdout
        assert "Did not finish: 0" in result.stdout

    def test_custom_shelf_workflow(self, populated_library):
        book_id = _book_id(populated_library, "Dune")

        created = runner.invoke(app, ["custom", "create", "Book club", str(populated_library)])
        added = runner.invoke(app, ["custom", "add", str(book_id), "Book club", str(populated_library)])
        listed = runner.invoke(app, ["custom", "list", str(populated_library)])
        books = runner.invoke(app, ["custom", "list", str(populated_library), "--name", "Book club"])

        assert created.exit_code == 0
        assert added.exit_code == 0
        assert "Book club (1 books)" in listed.stdout
        assert "Dune" in books.stdout

        deleted = runner.invoke(app, ["custom", "delete", "Book club", str(populated_library)])
        assert deleted.exit_code == 0
        assert "No custom shelves" in runner.invoke(app, ["custom", "list", str(populated_library)]).stdout

    def test_custom_shelf_reserved_name_fails(self, library_path):
        result = runner.invoke(app, ["custom", "create", "Read", str(library_path)])

        assert result.exit_code == 1
        assert "reserved" in result.stdout


class TestConfigCommand:
    """Tests for the config command."""

    def test_show_defaults(self):
        result = runner.invoke(app, ["config", "--show"])

        assert result.exit_code == 0
        assert "8000" in result.stdout

    def test_set_values(self, tmp_path):
        result = runner.invoke(app, ["config", "--library-path", str(tmp_path), "--server-port", "9000"])

        assert result.exit_code == 0
        shown = runner.invoke(app, ["config"])
        assert "9000" in shown.stdout

    def test_color_setting_reaches_consoles(self, monkeypatch):
        monkeypatch.setattr(cli.console, "no_color", False)
        monkeypatch.setattr(decorators.console, "no_color", False)
        monkeypatch.delenv("NO_COLOR", raising=False)

        runner.invoke(app, ["config", "--no-cli-color"])
        result = runner.invoke(app, ["config", "--show"])

        assert result.exit_code == 0
        assert cli.console.no_color is True
        assert decorators.console.no_color is True

    def test_color_on_by_default(self, monkeypatch):
        monkeypatch.setattr(cli.console, "no_color", True)
        monkeypatch.delenv("NO_COLOR", raising=False)

        runner.invoke(app, ["config", "--show"])

        assert cli.console.no_color is False

    def test_serve_without_library_fails(self):
        result = runner.invoke(app, ["serve"])

        assert result.exit_code == 1
        assert "No library path specified" in result.stdout
