"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu

from icon_gen import create_icon_image


def tray_title(day: date) -> str:
    return f"Pocket Calendar – {day.strftime('%d.%m.%Y')}"


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_today: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
    ]
    if on_today is not None:
        items.append(MenuItem("Today", lambda _icon, _item: on_today()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    menu = Menu(*items)
    return pystray.Icon("pocket-calendar", icon_image, tray_title(date.today()), menu)


def refresh_tray(icon: pystray.Icon, day: date) -> None:
    """Redraw the icon and tooltip for a new day."""
    icon.icon = create_icon_image(day)
    icon.title = tray_title(day)
