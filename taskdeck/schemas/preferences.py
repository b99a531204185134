from typing import Literal, Optional
from taskdeck.schemas.task import CamelModel

DefaultView = Literal["all", "today", "upcoming", "overdue", "goals", "recurring"]


class UserPreferences(CamelModel):
    theme: Literal["light", "dark", "system"] = "system"
    default_view: DefaultView = "all"
    show_completed_tasks: bool = True
    notifications_enabled: bool = True


class PreferencesUpdate(CamelModel):
    theme: Optional[Literal["light", "dark", "system"]] = None
    default_view: Optional[DefaultView] = None
    show_completed_tasks: Optional[bool] = None
    notifications_enabled: Optional[bool] = None
