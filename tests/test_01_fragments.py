#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for the fragment resolver and its location cache."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from wicketmock.services.errors import FragmentUnreadable
from wicketmock.services.fragments import NOT_FOUND, FragmentResolver
from conftest import write_tree


# ── Lookup ────────────────────────────────────────────────────────────────────

def test_resolve_finds_file_at_any_depth(resolver):
    content = resolver.resolve("GreetingPanel.html")
    assert content is not None
    assert "Greetings, [who]!" in content


def test_resolve_accepts_sub_path(resolver):
    content = resolver.resolve("nested/ProfilePage.html")
    assert content is not None
    assert 'label="Email"' in content


def test_resolve_ignores_leading_slash(resolver):
    assert resolver.resolve("/HomePage.html") == resolver.resolve("HomePage.html")


def test_resolve_missing_returns_none(resolver):
    assert resolver.resolve("NoSuchPage.html") is None


def test_resolve_empty_name_returns_none(resolver):
    assert resolver.resolve("") is None
    assert resolver.searches == 0


def test_directories_are_not_fragments(tmp_path):
    write_tree(tmp_path, {"Odd.html/inner.txt": "x"})
    resolver = FragmentResolver(tmp_path)
    assert resolver.resolve("Odd.html") is None


# ── Cache ─────────────────────────────────────────────────────────────────────

def test_second_lookup_skips_search(resolver):
    resolver.resolve("CardPanel.html")
    resolver.resolve("CardPanel.html")
    assert resolver.searches == 1
    assert "CardPanel.html" in resolver


def test_failed_lookup_is_cached_as_not_found(resolver):
    assert resolver.resolve("Ghost.html") is None
    assert resolver.resolve("Ghost.html") is None
    assert resolver.searches == 1
    assert resolver._paths["Ghost.html"] is NOT_FOUND
    assert resolver.snapshot()["Ghost.html"] is None


def test_search_runs_once_per_name_with_counting_double(resolver, monkeypatch):
    calls: list[str] = []
    original = resolver.candidates

    def counting(name):
        calls.append(name)
        return original(name)

    monkeypatch.setattr(resolver, "candidates", counting)
    for _ in range(3):
        resolver.resolve("GreetingPanel.html")
    resolver.resolve("CardPanel.html")
    assert calls == ["GreetingPanel.html", "CardPanel.html"]


def test_cached_path_is_read_fresh_each_time(template_root, resolver):
    resolver.resolve("CardPanel.html")
    path = template_root / "panels" / "CardPanel.html"
    path.write_text("changed", encoding="utf-8")
    assert resolver.resolve("CardPanel.html") == "changed"


def test_deleted_file_reads_as_missing(template_root, resolver):
    resolver.resolve("CardPanel.html")
    (template_root / "panels" / "CardPanel.html").unlink()
    assert resolver.resolve("CardPanel.html") is None


def test_clear_forgets_locations(resolver):
    resolver.resolve("CardPanel.html")
    resolver.resolve("Ghost.html")
    assert resolver.clear() == 2
    resolver.resolve("CardPanel.html")
    assert resolver.searches == 3


def test_concurrent_first_lookup_searches_once(resolver):
    results: list = []

    def worker():
        results.append(resolver.resolve("GreetingPanel.html"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert resolver.searches == 1
    assert len(set(results)) == 1 and results[0] is not None


# ── Tie-break ─────────────────────────────────────────────────────────────────

def test_shallowest_match_wins(tmp_path):
    write_tree(tmp_path, {
        "a/b/Dup.html": "deep",
        "z/Dup.html": "shallow",
    })
    assert FragmentResolver(tmp_path).resolve("Dup.html") == "shallow"


def test_lexicographic_order_breaks_equal_depth(tmp_path):
    write_tree(tmp_path, {
        "beta/Dup.html": "beta",
        "alpha/Dup.html": "alpha",
    })
    assert FragmentResolver(tmp_path).resolve("Dup.html") == "alpha"


def test_earlier_root_wins(tmp_path):
    write_tree(tmp_path, {
        "one/deep/er/Dup.html": "first root",
        "two/Dup.html": "second root",
    })
    resolver = FragmentResolver([tmp_path / "one", tmp_path / "two"])
    assert resolver.resolve("Dup.html") == "first root"


def test_glob_characters_in_name_are_literal(tmp_path):
    write_tree(tmp_path, {"x/Odd[1].html": "odd", "x/Odd1.html": "plain"})
    assert FragmentResolver(tmp_path).resolve("Odd[1].html") == "odd"


# ── Unreadable files ──────────────────────────────────────────────────────────

def test_latin1_bytes_are_replaced_not_fatal(tmp_path):
    (tmp_path / "LatinPage.html").write_bytes(b"<p>Gr\xfc\xdfe [name]</p>")
    content = FragmentResolver(tmp_path).resolve("LatinPage.html")
    assert content == "<p>Gr\ufffd\ufffde [name]</p>"


def test_read_failure_raises_fragment_unreadable(tmp_path, monkeypatch):
    write_tree(tmp_path, {"locked/LockedPage.html": "<p>secret</p>"})

    read_text = Path.read_text

    def denied(self, *args, **kwargs):
        if self.name == "LockedPage.html":
            raise PermissionError(13, "Permission denied", str(self))
        return read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", denied)
    with pytest.raises(FragmentUnreadable) as exc_info:
        FragmentResolver(tmp_path).resolve("LockedPage.html")
    assert exc_info.value.fragment == "LockedPage.html"
    assert "Permission denied" in exc_info.value.message
