"""
tests/test_utils.py
Unit tests for crudgen.utils (casing transforms and file helpers).
"""

from __future__ import annotations

import pathlib

import pytest

from crudgen.utils import (
    Timer,
    append_file,
    relative_to_root,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_plural,
    to_snake_case,
    write_file,
)


# ===========================================================================
# Casing
# ===========================================================================


class TestCasing:
    """Tokenisation-based casing transforms."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("blog", "Blog"),
            ("Blog", "Blog"),
            ("blog_post", "BlogPost"),
            ("blog-post", "BlogPost"),
            ("blog post", "BlogPost"),
            ("blogPost", "BlogPost"),
            ("HTTPClient", "HTTPClient"),
            ("v2_item", "V2Item"),
            ("", ""),
            ("___", ""),
        ],
    )
    def test_to_pascal_case(self, raw: str, expected: str) -> None:
        assert to_pascal_case(raw) == expected

    def test_to_camel_case_lowercases_first_letter_only(self) -> None:
        assert to_camel_case("Blog") == "blog"
        assert to_camel_case("BlogPost") == "blogPost"
        assert to_camel_case("blog_post") == "blogPost"
        assert to_camel_case("") == ""

    def test_to_snake_case(self) -> None:
        assert to_snake_case("Blogs") == "blogs"
        assert to_snake_case("BlogPosts") == "blog_posts"
        assert to_snake_case("HTTPClients") == "http_clients"

    def test_to_kebab_case(self) -> None:
        assert to_kebab_case("Blogs") == "blogs"
        assert to_kebab_case("BlogPosts") == "blog-posts"

    def test_non_ascii_letters_act_as_separators(self) -> None:
        assert to_pascal_case("café_menu") == "CafMenu"
        assert to_pascal_case("日本") == ""

    @pytest.mark.parametrize(
        "raw, snake",
        [
            ("Item2s", "item2s"),
            ("Oauth2Clients", "oauth2_clients"),
            ("V2Items", "v2_items"),
            ("HTTP2Clients", "http2_clients"),
            ("item2Blog", "item2_blog"),
        ],
    )
    def test_digits_stay_with_preceding_word(self, raw: str, snake: str) -> None:
        assert to_snake_case(raw) == snake
        assert to_kebab_case(raw) == snake.replace("_", "-")

    def test_leading_digits_form_their_own_word(self) -> None:
        assert to_snake_case("2fa_codes") == "2_fa_codes"


class TestPlural:
    """Pluralisation is a bare ``+s`` suffix."""

    def test_appends_s(self) -> None:
        assert to_plural("Blog") == "Blogs"
        assert to_plural("Team") == "Teams"

    def test_no_irregular_handling(self) -> None:
        assert to_plural("Category") == "Categorys"
        assert to_plural("Person") == "Persons"
        assert to_plural("Box") == "Boxs"

    def test_empty(self) -> None:
        assert to_plural("") == ""


# ===========================================================================
# File helpers
# ===========================================================================


class TestFileHelpers:
    def test_write_file_creates_parents(self, tmp_path: pathlib.Path) -> None:
        target = tmp_path / "a" / "b" / "c.txt"
        written = write_file(target, "héllo")
        assert target.read_text(encoding="utf-8") == "héllo"
        assert written == len("héllo".encode("utf-8"))

    def test_write_file_leaves_no_temp_files(self, tmp_path: pathlib.Path) -> None:
        target = tmp_path / "out.txt"
        write_file(target, "one")
        write_file(target, "two")
        assert target.read_text(encoding="utf-8") == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]

    def test_failed_write_keeps_original(
        self, tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        target = tmp_path / "keep.txt"
        target.write_text("original", encoding="utf-8")

        def broken_replace(src: str, dst: str) -> None:
            raise OSError("disk full")

        monkeypatch.setattr("crudgen.utils.os.replace", broken_replace)
        with pytest.raises(OSError):
            write_file(target, "new")

        assert target.read_text(encoding="utf-8") == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["keep.txt"]


    def test_append_file_inserts_missing_newline(self, tmp_path: pathlib.Path) -> None:
        target = tmp_path / "routes.php"
        target.write_text("<?php", encoding="utf-8")
        append_file(target, "Route::get('/');\n")
        assert target.read_text(encoding="utf-8") == "<?php\nRoute::get('/');\n"

    def test_append_file_keeps_existing_newline(self, tmp_path: pathlib.Path) -> None:
        target = tmp_path / "routes.php"
        target.write_text("<?php\n", encoding="utf-8")
        append_file(target, "x\n")
        assert target.read_text(encoding="utf-8") == "<?php\nx\n"

    def test_relative_to_root(self, tmp_path: pathlib.Path) -> None:
        assert relative_to_root(tmp_path / "app" / "X.php", tmp_path) == "app/X.php"
        outside = pathlib.Path("/elsewhere/X.php")
        assert relative_to_root(outside, tmp_path) == str(outside)


class TestTimer:
    def test_records_elapsed(self) -> None:
        with Timer("noop") as t:
            pass
        assert t.elapsed >= 0.0
        assert "noop" in repr(t)
