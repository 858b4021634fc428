"""Tests for search."""

from types import SimpleNamespace

from foldview.session import ViewerMode, ViewerSession

SAMPLE = [
    "root:",  # 0
    "  a:",  # 1
    "    a1: 1",  # 2
    "    a2:",  # 3
    "      x: 1",  # 4
    "      y: 2",  # 5
    "    a3: 3",  # 6
    "  b:",  # 7
    "    b1: 1",  # 8
    "tail",  # 9
]


def _key(char, key=None):
    return SimpleNamespace(key=key or char, character=char)


def _type(session, text):
    for ch in text:
        session.handle_key(_key(ch))


class TestFindNext:
    def test_case_insensitive_match(self):
        session = ViewerSession(["alpha", "Beta", "gamma"])
        session.search_term = "BETA"
        assert session.find_next() is True
        assert session.cursor_line_index == 1

    def test_starts_after_cursor_line(self):
        session = ViewerSession(["needle", "x", "needle", "y", "needle"])
        session.search_term = "needle"
        session.find_next()
        assert session.cursor_line_index == 2
        session.find_next()
        assert session.cursor_line_index == 4

    def test_wraparound_after_not_found(self):
        texts = [f"line {i}" for i in range(20)]
        texts[3] = "the NEEDLE"
        session = ViewerSession(texts)
        session.cursor_row = 10
        session.search_term = "needle"
        assert session.find_next() is False
        assert session.not_found
        assert session.find_next() is True
        assert not session.not_found
        assert session.cursor_line_index == 3

    def test_match_goes_to_top_of_window(self):
        session = ViewerSession([f"line {i}" for i in range(50)], height=12)
        session.search_term = "line 30"
        session.find_next()
        assert session.view_top == 30
        assert session.cursor_row == 0

    def test_match_near_end_keeps_view_clamped(self):
        session = ViewerSession([f"line {i}" for i in range(50)], height=12)
        session.search_term = "line 45"
        session.find_next()
        assert session.view_top == 40
        assert session.cursor_row == 5
        assert session.cursor_line_index == 45

    def test_no_lines(self):
        session = ViewerSession([])
        session.search_term = "x"
        assert session.find_next() is False


class TestSearchRevealsFolds:
    def test_unfolds_only_ancestors(self):
        session = ViewerSession(SAMPLE)
        session.set_all(True)
        session.search_term = "x: 1"
        assert session.find_next() is True

        assert not session.lines[4].hidden
        assert not any(session.lines[i].is_folded for i in (0, 1, 3))
        # sibling branch "b" stays folded
        assert session.lines[7].is_folded
        assert session.lines[8].hidden
        assert session.cursor_line_index == 4

    def test_nested_fold_inside_open_parent(self):
        session = ViewerSession(SAMPLE)
        session.toggle_fold(3)
        session.search_term = "y: 2"
        session.find_next()
        assert not session.lines[3].is_folded
        assert not session.lines[5].hidden


class TestSearchKeys:
    def test_enter_search_mode_and_type(self):
        session = ViewerSession(SAMPLE)
        session.handle_key(_key("", "ctrl+f"))
        assert session.mode == ViewerMode.SEARCHING
        _type(session, "b1 ")
        assert session.search_term == "b1 "

    def test_backspace_trims_then_exits(self):
        session = ViewerSession(SAMPLE)
        session.handle_key(_key("", "ctrl+f"))
        _type(session, "ab")
        session.handle_key(_key("\x08", "backspace"))
        assert session.search_term == "a"
        session.handle_key(_key("\x08", "backspace"))
        assert session.search_term == ""
        assert session.mode == ViewerMode.SEARCHING
        session.handle_key(_key("\x08", "backspace"))
        assert session.mode == ViewerMode.VIEWING

    def test_escape_cancels_search(self):
        session = ViewerSession(SAMPLE)
        session.handle_key(_key("", "ctrl+f"))
        _type(session, "tail")
        session.handle_key(_key("\x1b", "escape"))
        assert session.mode == ViewerMode.VIEWING
        assert session.cursor_line_index == 0
        assert session.quit_requested is False

    def test_enter_runs_search(self):
        session = ViewerSession(SAMPLE)
        session.handle_key(_key("", "ctrl+f"))
        _type(session, "TAIL")
        session.handle_key(_key("\r", "enter"))
        assert session.mode == ViewerMode.VIEWING
        assert session.cursor_line_index == 9

    def test_enter_returns_to_viewing_when_not_found(self):
        session = ViewerSession(SAMPLE)
        session.handle_key(_key("", "ctrl+f"))
        _type(session, "missing")
        session.handle_key(_key("\r", "enter"))
        assert session.mode == ViewerMode.VIEWING
        assert session.not_found

    def test_new_search_after_failure_clears_term(self):
        session = ViewerSession(SAMPLE)
        session.search_term = "missing"
        session.find_next()
        session.handle_key(_key("", "ctrl+f"))
        assert session.search_term == ""
        assert not session.not_found

    def test_new_search_after_success_keeps_term(self):
        session = ViewerSession(SAMPLE)
        session.search_term = "a1"
        session.find_next()
        session.handle_key(_key("", "ctrl+f"))
        assert session.search_term == "a1"

    def test_ctrl_n_repeats_search(self):
        session = ViewerSession(["x", "hit", "y", "hit"])
        session.search_term = "hit"
        session.handle_key(_key("", "ctrl+n"))
        assert session.cursor_line_index == 1
        session.handle_key(_key("", "ctrl+n"))
        assert session.cursor_line_index == 3
        session.handle_key(_key("", "ctrl+n"))
        assert session.not_found
        session.handle_key(_key("", "ctrl+n"))
        assert session.cursor_line_index == 1


class TestSearchStatus:
    def test_short_term(self):
        session = ViewerSession([], width=80)
        session.search_term = "abc"
        assert session.search_status_text() == "Search: abc▏"

    def test_long_term_truncated_from_left(self):
        session = ViewerSession([], width=52)
        session.search_term = "abcdefgh"
        assert session.search_status_text() == "Search: ...efgh▏"

    def test_no_room_for_term(self):
        session = ViewerSession([], width=40)
        session.search_term = "abc"
        assert session.search_status_text() == "Search: ...▏"
