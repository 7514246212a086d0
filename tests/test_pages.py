"""Tests for epictrack.ui.pages module."""

import pytest

from epictrack.lib.errors import NotFoundError
from epictrack.pm.repository import Repository
from epictrack.pm.store import InMemoryStore
from epictrack.ui import actions
from epictrack.ui.pages import (
    EPIC_MENU,
    HOME_MENU,
    STORY_MENU,
    EpicDetailPage,
    HomePage,
    StoryDetailPage,
    get_column_string,
    handle_input,
    render_page,
)
from epictrack.workflow.state_machine import Status


@pytest.fixture
def repo():
    """Two epics; epic 1 has stories 2 and 4, epic 3 has story 5."""
    repo = Repository(InMemoryStore())
    repo.create_epic("Epic One", "first epic")
    repo.create_story("Story Two", "second item", 1)
    repo.create_epic("Epic Three", "third epic")
    repo.create_story("Story Four", "fourth item", 1)
    repo.create_story("Story Five", "fifth item", 3)
    repo.update_story_status(4, Status.RESOLVED)
    return repo


class TestGetColumnString:
    """Tests for get_column_string()."""

    def test_pads_short_text(self):
        assert get_column_string("test", 6) == "test  "

    def test_exact_width(self):
        assert get_column_string("test", 4) == "test"

    def test_truncates_long_text(self):
        assert get_column_string("test", 3) == "..."
        assert get_column_string("testing", 6) == "tes..."

    def test_tiny_widths(self):
        assert get_column_string("test", 2) == ".."
        assert get_column_string("test", 1) == "."
        assert get_column_string("test", 0) == ""

    def test_empty_text(self):
        assert get_column_string("", 3) == "   "

    @pytest.mark.parametrize("text", ["", "a", "abcdefghijklmnop"])
    @pytest.mark.parametrize("width", [0, 3, 4, 11])
    def test_result_has_width(self, text, width):
        assert len(get_column_string(text, width)) == width


class TestRenderPage:
    """Tests for render_page()."""

    def test_home_lists_epics(self, repo):
        text = render_page(HomePage(), repo).plain

        assert "EPICS" in text
        assert "Epic One" in text
        assert "Epic Three" in text
        assert "Story Two" not in text
        assert text.endswith(HOME_MENU)

    def test_home_empty(self):
        text = render_page(HomePage(), Repository(InMemoryStore())).plain
        assert "EPICS" in text

    def test_epic_detail_lists_only_its_stories(self, repo):
        text = render_page(EpicDetailPage(1), repo).plain

        assert "first epic" in text
        assert "Story Two" in text
        assert "Story Four" in text
        assert "Resolved" in text
        assert "Story Five" not in text
        assert text.endswith(EPIC_MENU)

    def test_story_detail(self, repo):
        text = render_page(StoryDetailPage(1, 4), repo).plain

        assert "STORY" in text
        assert "Story Four" in text
        assert "fourth item" in text
        assert "Resolved" in text
        assert text.endswith(STORY_MENU)

    def test_long_name_is_truncated(self):
        repo = Repository(InMemoryStore())
        repo.create_epic("x" * 50, "")

        text = render_page(HomePage(), repo).plain

        assert "x" * 29 + "..." in text
        assert "x" * 30 not in text

    def test_missing_epic_raises(self, repo):
        with pytest.raises(NotFoundError):
            render_page(EpicDetailPage(42), repo)

    def test_missing_story_raises(self, repo):
        with pytest.raises(NotFoundError):
            render_page(StoryDetailPage(1, 42), repo)

    def test_unknown_page_raises(self, repo):
        with pytest.raises(TypeError):
            render_page("home", repo)


class TestHomeInput:
    """Tests for handle_input() on the home page."""

    def test_quit(self, repo):
        assert handle_input(HomePage(), "q", repo) == actions.Exit()

    def test_create_epic(self, repo):
        assert handle_input(HomePage(), "c", repo) == actions.CreateEpic()

    def test_navigate_to_epic(self, repo):
        assert handle_input(HomePage(), "3", repo) == actions.NavigateTo(EpicDetailPage(3))

    def test_story_id_is_not_an_epic(self, repo):
        assert handle_input(HomePage(), "2", repo) is None

    @pytest.mark.parametrize("raw", ["", "Q", "quit", " q", "9", "-1", "1.0", "p", "1 "])
    def test_unrecognized(self, repo, raw):
        assert handle_input(HomePage(), raw, repo) is None


class TestEpicDetailInput:
    """Tests for handle_input() on the epic detail page."""

    @pytest.mark.parametrize("raw, expected", [
        ("p", actions.NavigateBack()),
        ("u", actions.UpdateEpicStatus(1)),
        ("d", actions.DeleteEpic(1)),
        ("c", actions.CreateStory(1)),
    ])
    def test_commands(self, repo, raw, expected):
        assert handle_input(EpicDetailPage(1), raw, repo) == expected

    def test_navigate_to_own_story(self, repo):
        action = handle_input(EpicDetailPage(1), "4", repo)
        assert action == actions.NavigateTo(StoryDetailPage(1, 4))

    def test_story_of_other_epic_rejected(self, repo):
        assert handle_input(EpicDetailPage(1), "5", repo) is None

    def test_unknown_story_rejected(self, repo):
        assert handle_input(EpicDetailPage(1), "77", repo) is None

    def test_unrecognized(self, repo):
        assert handle_input(EpicDetailPage(1), "q", repo) is None


class TestStoryDetailInput:
    """Tests for handle_input() on the story detail page."""

    @pytest.mark.parametrize("raw, expected", [
        ("p", actions.NavigateBack()),
        ("u", actions.UpdateStoryStatus(4)),
        ("d", actions.DeleteStory(1, 4)),
    ])
    def test_commands(self, repo, raw, expected):
        assert handle_input(StoryDetailPage(1, 4), raw, repo) == expected

    @pytest.mark.parametrize("raw", ["c", "q", "2", ""])
    def test_unrecognized(self, repo, raw):
        assert handle_input(StoryDetailPage(1, 4), raw, repo) is None


def separator_columns(line: str) -> list[int]:
    return [i for i, c in enumerate(line) if c == "|"]


class TestTableAlignment:
    """Header separators line up with the row separators below them."""

    @pytest.mark.parametrize("page, first_row", [
        (HomePage(), "Epic One"),
        (EpicDetailPage(1), "first epic"),
        (EpicDetailPage(1), "Story Two"),
        (StoryDetailPage(1, 4), "fourth item"),
    ])
    def test_header_matches_rows(self, repo, page, first_row):
        lines = render_page(page, repo).plain.splitlines()
        row_index = next(i for i, line in enumerate(lines) if first_row in line)
        header = lines[row_index - 1]

        assert "id" in header
        assert separator_columns(header) == separator_columns(lines[row_index])
