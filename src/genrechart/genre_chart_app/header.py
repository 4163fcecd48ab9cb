"""Header component for the genre chart app.

Provides build_genre_chart_header() with title and theme toggle.
"""

from __future__ import annotations

from nicegui import app, ui

THEME_STORAGE_KEY = "genre_chart_dark_mode"


def build_genre_chart_header(*, title: str = "Movie Genres") -> ui.dark_mode:
    """Build header with title (left) and dark/light toggle (right).

    The dark-mode choice is kept in app.storage.user, so ui.run() needs a
    storage_secret.

    Returns:
        Dark mode controller for the page.
    """
    dark_mode = ui.dark_mode()
    dark_mode.value = app.storage.user.get(THEME_STORAGE_KEY, False)

    def _update_theme_icon() -> None:
        icon = "light_mode" if dark_mode.value else "dark_mode"
        theme_btn.props(f"icon={icon}")

    def _toggle_theme() -> None:
        dark_mode.value = not dark_mode.value
        app.storage.user[THEME_STORAGE_KEY] = dark_mode.value
        _update_theme_icon()

    with ui.header().classes("items-center justify-between").props("dense").style(
        "min-height: 36px; height: 36px; padding: 0 8px;"
    ):
        ui.label(title).classes("!text-lg font-bold italic text-white")

        theme_btn = ui.button(
            icon="light_mode" if dark_mode.value else "dark_mode",
            on_click=_toggle_theme,
        ).props("flat round dense text-color=white").tooltip("Toggle dark / light mode")

    return dark_mode
