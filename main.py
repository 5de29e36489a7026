"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import os
import threading

from calendar_session import CalendarSession
from calendar_window import CalendarWindow
from event_store import EventStore
from icon_gen import create_icon_image
from settings import EventFile
from tray_icon import create_tray, refresh_tray


def main() -> None:
    level = logging.DEBUG if os.environ.get("POCKET_CALENDAR_DEBUG") else logging.WARNING
    logging.basicConfig(level=level,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    store = EventStore.load(EventFile())
    session = CalendarSession(store)
    cal_win = CalendarWindow(session)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_today() -> None:
        cal_win.root.after(0, cal_win.go_today)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    tray = create_tray(create_icon_image(), on_show, on_exit, on_today=on_today)
    # The icon shows the day of month, so it follows every date change
    session.on_rollover(lambda day: refresh_tray(tray, day))

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    cal_win.show()
    # tkinter main loop on the main thread
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
