"""Explicit view-state records for menus and modals."""

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class MenuGroup:
    """A group of menus where at most one is open at a time."""

    open_id: str | None = None

    def toggle(self, menu_id: str) -> "MenuGroup":
        return replace(self, open_id=None if self.open_id == menu_id else menu_id)

    def close(self) -> "MenuGroup":
        return replace(self, open_id=None)

    def is_open(self, menu_id: str) -> bool:
        return self.open_id == menu_id


@dataclass(frozen=True)
class ViewState:
    """UI state for a list page: row action menus, filter panel, edit modal."""

    actions: MenuGroup = field(default_factory=MenuGroup)
    show_filters: bool = False
    editor_open: bool = False
    editing_id: str | None = None

    def open_editor(self, record_id: str | None = None) -> "ViewState":
        """Open the edit modal; no id means a new record. Closes row menus."""
        return replace(self, editor_open=True, editing_id=record_id, actions=self.actions.close())

    def close_editor(self) -> "ViewState":
        return replace(self, editor_open=False, editing_id=None)

    def toggle_filters(self) -> "ViewState":
        return replace(self, show_filters=not self.show_filters)
