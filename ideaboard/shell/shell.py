"""
Presentation shell — login/register screen and the idea dashboard, minus the pixels.

Holds only ephemeral view state plus the remembered identity, which is written
to the injected ``IdentityStore`` only when the user opts in.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import requests

from ideaboard.shell.client import ApiClient
from ideaboard.shell.storage import IdentityStore

logger = logging.getLogger(__name__)

USER_KEY = "user"

NETWORK_ERROR = "Network error. Please try again."

# Labels the dashboard offers; the server accepts any non-empty value.
PROJECTS = {
    "web-app": "Web Application",
    "mobile-app": "Mobile Application",
    "dashboard": "Dashboard System",
    "api": "API Development",
    "database": "Database Management",
}
MODULES = {
    "authentication": "Authentication",
    "user-management": "User Management",
    "reporting": "Reporting",
    "analytics": "Analytics",
    "notifications": "Notifications",
    "settings": "Settings",
}
SECTIONS = {
    "frontend": "Frontend",
    "backend": "Backend",
    "database": "Database",
    "ui-ux": "UI/UX",
    "testing": "Testing",
    "deployment": "Deployment",
}

TABS = ("task",)
SUB_TABS = ("idea", "assign", "status")

# Seconds a banner stays up.
SHORT_BANNER = 3
LONG_BANNER = 5


@dataclass
class Banner:
    text: str
    kind: str  # success | error
    expires_at: Optional[float] = None


class PresentationShell:
    def __init__(
        self,
        api: ApiClient,
        store: IdentityStore,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.api = api
        self.store = store
        self.clock = clock

        self.screen = "login"
        self.active_tab = "task"
        self.task_menu_open = True
        self.active_sub_tab = "idea"
        self.user: Optional[Dict[str, Any]] = None
        self.ideas: List[Dict[str, Any]] = []
        self.stats: Optional[Dict[str, Any]] = None

        self.loading = False
        self.submitting = False
        self.loading_ideas = False
        self._banner: Optional[Banner] = None
        self._reset_forms()

    # ═══════════════════════════════════════════════════════════════
    #  View state
    # ═══════════════════════════════════════════════════════════════

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None

    @property
    def banner(self) -> Optional[Banner]:
        """The current banner, or None once it has expired."""
        if self._banner and self._banner.expires_at is not None and self.clock() >= self._banner.expires_at:
            self._banner = None
        return self._banner

    def _show(self, text: str, kind: str, seconds: Optional[float] = None) -> None:
        expires_at = self.clock() + seconds if seconds is not None else None
        self._banner = Banner(text=text, kind=kind, expires_at=expires_at)

    def clear_banner(self) -> None:
        self._banner = None

    def _reset_forms(self) -> None:
        self.form: Dict[str, Any] = {
            "full_name": "",
            "phone_number": "",
            "password": "",
            "confirm_password": "",
            "remember_me": False,
        }
        self.idea_form: Dict[str, str] = {"text": "", "project": "", "module": "", "section": ""}

    def show_register(self) -> None:
        self.screen = "register"
        self.clear_banner()

    def show_login(self) -> None:
        self.screen = "login"
        self.clear_banner()

    def select_tab(self, name: str) -> None:
        """Activate a top-level tab; clicking it again folds its sub-menu."""
        if name not in TABS:
            raise ValueError(f"Unknown tab: {name}")
        self.active_tab = name
        self.task_menu_open = not self.task_menu_open

    @property
    def visible_sub_tabs(self) -> tuple:
        if self.active_tab == "task" and self.task_menu_open:
            return SUB_TABS
        return ()

    def select_sub_tab(self, name: str) -> None:
        if name not in SUB_TABS:
            raise ValueError(f"Unknown tab: {name}")
        if name not in self.visible_sub_tabs:
            raise ValueError(f"Tab {name} is not visible")
        self.active_sub_tab = name
        if name == "idea" and self.is_logged_in:
            self.refresh_ideas()

    # ═══════════════════════════════════════════════════════════════
    #  Session
    # ═══════════════════════════════════════════════════════════════

    def restore(self) -> bool:
        """Pick up a remembered identity from a previous run."""
        saved = self.store.get(USER_KEY)
        if not isinstance(saved, dict) or "id" not in saved:
            return False
        self.user = saved
        self.screen = "dashboard"
        self.refresh_ideas()
        return True

    def login(self, phone_number: str, password: str, remember: bool = False) -> bool:
        self.loading = True
        self.clear_banner()
        try:
            resp = self.api.login(phone_number, password)
        except requests.RequestException:
            logger.exception("Login request failed")
            self._show(NETWORK_ERROR, "error")
            return False
        finally:
            self.loading = False

        if not resp.success:
            self._show(resp.message or "Login failed", "error")
            return False

        self.user = resp.data["user"]
        if remember:
            self.store.set(USER_KEY, self.user)
        self._reset_forms()
        self.screen = "dashboard"
        self._show("Login successful!", "success")
        self.refresh_ideas()
        return True

    def register(self, full_name: str, phone_number: str, password: str, confirm_password: str) -> bool:
        self.clear_banner()
        if password != confirm_password:
            self._show("Passwords do not match!", "error")
            return False

        self.loading = True
        try:
            resp = self.api.register(full_name, phone_number, password)
        except requests.RequestException:
            logger.exception("Registration request failed")
            self._show(NETWORK_ERROR, "error")
            return False
        finally:
            self.loading = False

        if not resp.success:
            self._show(resp.message or "Registration failed", "error")
            return False

        self._reset_forms()
        self.screen = "login"
        self._show("Registration successful! You can now login.", "success", seconds=2)
        return True

    def logout(self) -> None:
        self.user = None
        self.ideas = []
        self.stats = None
        self.store.delete(USER_KEY)
        self._reset_forms()
        self.clear_banner()
        self.screen = "login"
        self.active_tab = "task"
        self.task_menu_open = True
        self.active_sub_tab = "idea"

    # ═══════════════════════════════════════════════════════════════
    #  Ideas
    # ═══════════════════════════════════════════════════════════════

    def refresh_ideas(self) -> None:
        """Reload the current user's ideas and counters; failures keep the old list."""
        if not self.user:
            return
        self.loading_ideas = True
        try:
            resp = self.api.list_user_ideas(self.user["id"])
            if resp.success:
                self.ideas = resp.data.get("ideas", [])
            stats = self.api.user_idea_stats(self.user["id"])
            if stats.success:
                self.stats = stats.data.get("stats")
        except requests.RequestException:
            logger.exception("Failed to fetch ideas")
        finally:
            self.loading_ideas = False

    def submit_idea(self, text: str, project: str, module: str, section: str) -> bool:
        self.idea_form = {"text": text, "project": project, "module": module, "section": section}
        if not self.user:
            self._show("Please log in first", "error", SHORT_BANNER)
            return False
        if not (text or "").strip() or not project or not module or not section:
            self._show("Please fill in all fields", "error", SHORT_BANNER)
            return False

        self.submitting = True
        try:
            resp = self.api.submit_idea(
                text=text,
                project=project,
                module=module,
                section=section,
                submitted_by=self.user["fullName"],
                user_id=self.user["id"],
            )
        except requests.RequestException:
            logger.exception("Idea submission failed")
            self._show("Error submitting idea. Please try again.", "error", LONG_BANNER)
            return False
        finally:
            self.submitting = False

        if not resp.success:
            self._show(resp.message or "Idea submission failed", "error", LONG_BANNER)
            return False

        self.idea_form = {"text": "", "project": "", "module": "", "section": ""}
        self._show("Idea submitted successfully!", "success", LONG_BANNER)
        self.refresh_ideas()
        return True
