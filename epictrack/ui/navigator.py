"""
Page-stack navigation.

The Navigator owns the stack of pages and executes the actions pages
produce: pushing and popping pages, and calling the repository with data
from the prompt collaborators. An empty stack means the session is over.
"""

import logging
from typing import Optional

from epictrack.pm.repository import Repository
from epictrack.ui import actions
from epictrack.ui.pages import HomePage, Page
from epictrack.ui.prompts import Prompts

logger = logging.getLogger(__name__)


class Navigator:
    """Page stack controller.

    Repository errors raised while handling an action propagate to the
    caller and leave the stack as it was.
    """

    def __init__(self, repository: Repository, prompts: Optional[Prompts] = None):
        self.repository = repository
        self.prompts = prompts or Prompts()
        self.pages: list[Page] = [HomePage()]

    @property
    def current_page(self) -> Optional[Page]:
        """Topmost page, or None once the stack is empty."""
        return self.pages[-1] if self.pages else None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def is_finished(self) -> bool:
        return not self.pages

    def _pop(self) -> None:
        if self.pages:
            self.pages.pop()

    def handle_action(self, action: "actions.Action") -> None:
        """Execute one action.

        Raises:
            NotFoundError, LinkageError, StatusTransitionError: Repository
                rejected the change
            StoreError: Snapshot could not be read or written
            TypeError: Unknown action
        """
        logger.debug(f"[NAV] {action!r} (depth {self.page_count})")

        if isinstance(action, actions.NavigateTo):
            self.pages.append(action.page)

        elif isinstance(action, actions.NavigateBack):
            self._pop()

        elif isinstance(action, actions.CreateEpic):
            entry = self.prompts.create_epic()
            if entry is not None:
                self.repository.create_epic(entry.name, entry.description)

        elif isinstance(action, actions.CreateStory):
            entry = self.prompts.create_story()
            if entry is not None:
                self.repository.create_story(entry.name, entry.description, action.epic_id)

        elif isinstance(action, actions.UpdateEpicStatus):
            status = self.prompts.update_status()
            if status is not None:
                self.repository.update_epic_status(action.epic_id, status)

        elif isinstance(action, actions.UpdateStoryStatus):
            status = self.prompts.update_status()
            if status is not None:
                self.repository.update_story_status(action.story_id, status)

        elif isinstance(action, actions.DeleteEpic):
            if self.prompts.delete_epic():
                self.repository.delete_epic(action.epic_id)
                # Page showed the deleted epic, land on its parent
                self._pop()

        elif isinstance(action, actions.DeleteStory):
            if self.prompts.delete_story():
                self.repository.delete_story(action.epic_id, action.story_id)
                self._pop()

        elif isinstance(action, actions.Exit):
            self.pages.clear()

        else:
            raise TypeError(f"Unknown action: {action!r}")
