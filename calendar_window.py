"""Day/week/month/year calendar window (tkinter)."""

import logging
from datetime import date
from tkinter import font as tkfont
from tkinter import messagebox
import tkinter as tk

from calendar_logic import DAY_ABBR, day_of_year
from calendar_session import MOUSE_SWIPE_THRESHOLD, CalendarSession
from event_store import TIMED, DateKey
from settings import load_settings, save_settings
from view_composer import CellDescriptor, ViewModel

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
WN_FG = "#888888"
HOLIDAY_FG = "#E84545"
WEEKEND_FG = "#CC0000"

DOT_COLORS = {
    "holiday": HOLIDAY_FG,
    "event": ACCENT,
    "birthday": "#E8A33D",
}

ROLLOVER_MS = 60_000


def _hour_label(hour: int) -> str:
    return f"{hour:02d}:00"


def _record_label(record) -> str:
    if record.kind == TIMED:
        return f"{_hour_label(record.hour)} — {record.text}"
    if record.is_yearly:
        return f"\U0001F382 {record.text}"
    return record.text


class _ToolTip:
    """Lightweight shared tooltip for holiday labels."""

    __slots__ = ("_root", "_tw")

    def __init__(self, root: tk.Tk) -> None:
        self._root = root
        self._tw: tk.Toplevel | None = None

    def show(self, widget: tk.Widget, text: str) -> None:
        self.hide()
        tw = tk.Toplevel(self._root)
        tw.wm_overrideredirect(True)
        tw.wm_attributes("-topmost", True)
        lbl = tk.Label(
            tw, text=text, bg="#FFFFE0", fg="black",
            relief="solid", borderwidth=1, padx=6, pady=3, justify="left",
        )
        lbl.pack()
        x = widget.winfo_rootx() + widget.winfo_width() // 2
        y = widget.winfo_rooty() + widget.winfo_height() + 2
        tw.wm_geometry(f"+{x}+{y}")
        self._tw = tw

    def hide(self) -> None:
        if self._tw:
            self._tw.destroy()
            self._tw = None


class CalendarWindow:
    """Calendar window driven by a CalendarSession."""

    def __init__(self, session: CalendarSession) -> None:
        self.session = session
        self.root = tk.Tk()
        self.root.title(self._title())
        self.root.resizable(True, True)
        self.root.configure(bg=GRID_BG)

        self._setup_fonts()

        settings = load_settings()
        self._saved_width: int | None = settings["window_width"]
        self._saved_height: int | None = settings["window_height"]
        self.session.set_view(settings["view"])

        # Widget id -> action run on a click (not on a drag)
        self._click_actions: dict[int, object] = {}
        # Widget id -> holiday label for the tooltip
        self._tooltips: dict[int, str] = {}
        self._press_xy: tuple[int, int] | None = None

        self._view_buttons: dict[str, tk.Label] = {}
        self._build_shell()
        self._tooltip = _ToolTip(self.root)
        self.render()

        self.root.bind("<ButtonPress-1>", self._on_press)
        self.root.bind("<ButtonRelease-1>", self._on_release)
        self.root.bind("<Escape>", lambda _e: self.hide())
        self.root.bind("<Left>", lambda _e: self._navigate(-1))
        self.root.bind("<Right>", lambda _e: self._navigate(1))
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.after(ROLLOVER_MS, self._check_rollover)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=10)
        self.font_small = tkfont.Font(family=base, size=8)
        self.font_bold = tkfont.Font(family=base, size=10, weight="bold")
        self.font_title = tkfont.Font(family=base, size=14, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")

    @staticmethod
    def _title() -> str:
        return f"Pocket Calendar  Day: {day_of_year(date.today())}"

    # ------------------------------------------------------------------
    # Build shell (once): nav bar, title, content placeholder, view bar
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        self._outer = tk.Frame(self.root, bg=GRID_BG)
        self._outer.pack(fill="both", expand=True, padx=6, pady=4)

        # Navigation row: ◀  Today  ▶ with the title in between
        nav = tk.Frame(self._outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 2))

        btn_prev = tk.Label(
            nav, text="◀", font=self.font_nav, bg=GRID_BG, cursor="hand2"
        )
        btn_prev.pack(side="left", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self._navigate(-1))

        btn_next = tk.Label(
            nav, text="▶", font=self.font_nav, bg=GRID_BG, cursor="hand2"
        )
        btn_next.pack(side="right", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self._navigate(1))

        btn_today = tk.Label(
            nav, text="Today", font=self.font_bold, bg=GRID_BG, fg=ACCENT,
            cursor="hand2",
        )
        btn_today.pack(side="right", padx=6)
        btn_today.bind("<Button-1>", lambda _e: self._go_today())

        titles = tk.Frame(nav, bg=GRID_BG)
        titles.pack(side="left", fill="x", expand=True)
        self._title_label = tk.Label(titles, font=self.font_title, bg=GRID_BG)
        self._title_label.pack()
        self._subtitle_label = tk.Label(
            titles, font=self.font_normal, bg=GRID_BG, fg="#555555",
        )
        self._subtitle_label.pack()

        self._content = tk.Frame(self._outer, bg=GRID_BG)
        self._content.pack(fill="both", expand=True)

        # View bar: Day | Week | Month | Year
        bar = tk.Frame(self._outer, bg=HEADER_BG)
        bar.pack(fill="x", pady=(4, 0))
        for mode in ("day", "week", "month", "year"):
            btn = tk.Label(
                bar, text=mode.capitalize(), font=self.font_bold, bg=HEADER_BG,
                padx=10, pady=4, cursor="hand2",
            )
            btn.pack(side="left", expand=True, fill="x")
            btn.bind("<Button-1>", lambda _e, m=mode: self._set_view(m))
            self._view_buttons[mode] = btn

    # ------------------------------------------------------------------
    # Render the current ViewModel
    # ------------------------------------------------------------------
    def render(self) -> None:
        vm = self.session.render()
        self._tooltip.hide()
        self._click_actions.clear()
        self._tooltips.clear()
        for child in self._content.winfo_children():
            child.destroy()

        self._title_label.configure(text=vm.title)
        self._subtitle_label.configure(text=vm.subtitle)
        for mode, btn in self._view_buttons.items():
            btn.configure(fg=ACCENT if mode == vm.mode else "#333333")

        if vm.mode == "month":
            self._draw_month(vm)
        elif vm.mode == "week":
            self._draw_week(vm)
        elif vm.mode == "day":
            self._draw_day(vm)
        else:
            self._draw_year(vm)

    def _draw_grid(self, parent: tk.Frame, cells, cell_w: int, cell_h: int,
                   font, week_numbers=()) -> None:
        # Week numbers take column 0 when given
        offset = 1 if week_numbers else 0
        small = cell_w <= 30
        if week_numbers:
            tk.Label(
                parent, text="Wk", font=self.font_bold, bg=GRID_BG, fg=WN_FG,
                width=3,
            ).grid(row=0, column=0)
            for r, week in enumerate(week_numbers):
                tk.Label(
                    parent, text=str(week), font=self.font_small, bg=GRID_BG,
                    fg=WN_FG, width=3,
                ).grid(row=r + 1, column=0)
        for col, abbr in enumerate(DAY_ABBR):
            fg = WEEKEND_FG if col >= 5 else "#333333"
            tk.Label(
                parent, text=abbr, font=self.font_small if small else self.font_bold,
                bg=GRID_BG, fg=fg,
            ).grid(row=0, column=col + offset, sticky="we")
        for i, cell in enumerate(cells):
            canvas = tk.Canvas(
                parent, width=cell_w, height=cell_h,
                bg=GRID_BG, highlightthickness=0, borderwidth=0,
            )
            canvas.grid(row=1 + i // 7, column=i % 7 + offset, sticky="nsew")
            self._draw_cell(canvas, cell, cell_w, cell_h, font)
            if cell.date is not None:
                self._register(canvas, cell)
        for col in range(7):
            parent.grid_columnconfigure(col + offset, weight=1)

    def _draw_month(self, vm: ViewModel) -> None:
        grid = tk.Frame(self._content, bg=GRID_BG)
        grid.pack(fill="both", expand=True)
        self._draw_grid(grid, vm.cells, 56, 48, self.font_normal,
                        week_numbers=vm.week_numbers)
        for r in range(1, len(vm.cells) // 7 + 1):
            grid.grid_rowconfigure(r, weight=1)

    def _draw_week(self, vm: ViewModel) -> None:
        for col, cell in enumerate(vm.cells):
            column = tk.Frame(self._content, bg=GRID_BG, bd=1, relief="groove")
            column.grid(row=0, column=col, sticky="nsew", padx=1)
            self._content.grid_columnconfigure(col, weight=1)

            head = tk.Canvas(
                column, width=56, height=40,
                bg=GRID_BG, highlightthickness=0, borderwidth=0,
            )
            head.pack(fill="x")
            self._draw_cell(head, cell, 56, 40, self.font_bold,
                            caption=DAY_ABBR[col])
            self._register(head, cell)

            items = cell.all_day_events + sorted(
                (r for r in cell.normal_events if r.kind == TIMED),
                key=lambda r: r.hour,
            )
            for record in items:
                tk.Label(
                    column, text=_record_label(record), font=self.font_small,
                    bg=GRID_BG, anchor="w", wraplength=90, justify="left",
                ).pack(fill="x", padx=2)
        self._content.grid_rowconfigure(0, weight=1)

    def _draw_day(self, vm: ViewModel) -> None:
        cell = vm.cells[0]
        key = DateKey.from_date(cell.date)

        top = tk.Frame(self._content, bg=GRID_BG)
        top.pack(fill="x")
        if cell.holiday:
            tk.Label(
                top, text=f"\U0001F4C5 {cell.holiday}", font=self.font_bold,
                bg=GRID_BG, fg=HOLIDAY_FG, anchor="w",
            ).pack(fill="x")
        for record in cell.all_day_events:
            tk.Label(
                top, text=_record_label(record), font=self.font_normal,
                bg=GRID_BG, anchor="w",
            ).pack(fill="x")

        hours = tk.Frame(self._content, bg=GRID_BG)
        hours.pack(fill="both", expand=True)
        for hour in range(24):
            row = tk.Label(
                hours,
                text="  ".join(
                    [_hour_label(hour)]
                    + [r.text for r in cell.timed_events(hour)]
                ),
                font=self.font_small, bg=GRID_BG, anchor="w",
                bd=1, relief="groove", cursor="hand2",
            )
            row.grid(row=hour % 12, column=hour // 12, sticky="nsew")
            self._click_actions[id(row)] = (
                lambda h=hour: self.open_event_dialog(key, h)
            )
        for col in range(2):
            hours.grid_columnconfigure(col, weight=1)

    def _draw_year(self, vm: ViewModel) -> None:
        for i, block in enumerate(vm.months):
            panel = tk.Frame(self._content, bg=GRID_BG)
            panel.grid(row=i // 4, column=i % 4, padx=6, pady=2, sticky="n")
            header = tk.Label(
                panel, text=block.title, font=self.font_bold, bg=HEADER_BG,
                fg="#333333", cursor="hand2",
            )
            header.pack(fill="x")
            self._click_actions[id(header)] = (
                lambda y=block.year, m=block.month: self._open_month(y, m)
            )
            grid = tk.Frame(panel, bg=GRID_BG)
            grid.pack()
            self._draw_grid(grid, block.cells, 22, 20, self.font_small)

    # ------------------------------------------------------------------
    # Canvas cell drawing: day number plus indicator dots
    # ------------------------------------------------------------------
    def _draw_cell(self, canvas: tk.Canvas, cell: CellDescriptor, w: int, h: int,
                   font, caption: str | None = None) -> None:
        canvas.delete("all")
        if cell.date is None:
            return

        text = str(cell.day_number)
        if caption:
            text = f"{caption} {text}"
        cx, cy = w // 2, h // 2 - 4
        if cell.number_style == "today":
            r = max(8, min(w, h) // 3)
            if caption:
                canvas.create_rectangle(2, 2, w - 2, h - 10, fill=ACCENT, outline="")
            else:
                canvas.create_oval(cx - r, cy - r, cx + r, cy + r,
                                   fill=ACCENT, outline="")
            fg = "white"
        elif cell.number_style == "holiday":
            fg = HOLIDAY_FG
        elif cell.number_style == "weekend":
            fg = WEEKEND_FG
        else:
            fg = "black"
        canvas.create_text(cx, cy, text=text, fill=fg, font=font)

        dot = 2 if w < 30 else 3
        gap = dot * 3
        x0 = w // 2 - (len(cell.dots) - 1) * gap // 2
        y = h - dot - 2
        for i, kind in enumerate(cell.dots):
            x = x0 + i * gap
            canvas.create_oval(x - dot, y - dot, x + dot, y + dot,
                               fill=DOT_COLORS[kind], outline="")
        canvas.configure(cursor="hand2")

    def _register(self, widget: tk.Widget, cell: CellDescriptor) -> None:
        key = DateKey.from_date(cell.date)
        self._click_actions[id(widget)] = lambda: self.open_event_dialog(key)
        if cell.holiday:
            self._tooltips[id(widget)] = cell.holiday
            widget.bind("<Enter>", self._on_cell_enter)
            widget.bind("<Leave>", lambda _e: self._tooltip.hide())

    def _on_cell_enter(self, event: tk.Event) -> None:
        label = self._tooltips.get(id(event.widget))
        if label:
            self._tooltip.show(event.widget, label)

    # ------------------------------------------------------------------
    # Click vs. drag: a horizontal drag navigates, anything else clicks
    # ------------------------------------------------------------------
    def _on_press(self, event: tk.Event) -> None:
        self._press_xy = (event.x_root, event.y_root)

    def _on_release(self, event: tk.Event) -> None:
        if self._press_xy is None:
            return
        x0, y0 = self._press_xy
        self._press_xy = None
        if self.session.swipe(event.x_root - x0, event.y_root - y0,
                              MOUSE_SWIPE_THRESHOLD):
            self.render()
            return
        w = event.widget.winfo_containing(event.x_root, event.y_root)
        action = self._click_actions.get(id(w)) if w else None
        if action:
            action()

    # ------------------------------------------------------------------
    # Event dialog
    # ------------------------------------------------------------------
    def open_event_dialog(self, key: DateKey, hour: int | None = None) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title(key.to_date().strftime("%a %d %b %Y"))
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        heading = key.to_date().strftime("%A, %d %B %Y")
        if hour is not None:
            heading += f"  {_hour_label(hour)}"
        tk.Label(frame, text=heading, font=self.font_bold).pack(anchor="w")

        listing = tk.Frame(frame)
        listing.pack(fill="x", pady=(6, 6))

        def fill_listing() -> None:
            for child in listing.winfo_children():
                child.destroy()
            holiday, records = self.session.day_details(key)
            if holiday:
                tk.Label(
                    listing, text=f"\U0001F4C5 {holiday}", font=self.font_bold,
                    fg=HOLIDAY_FG, anchor="w",
                ).pack(fill="x")
            for idx, record in enumerate(records):
                row = tk.Frame(listing)
                row.pack(fill="x", pady=1)
                tk.Label(
                    row, text=_record_label(record), font=self.font_normal,
                    anchor="w",
                ).pack(side="left", fill="x", expand=True)
                tk.Button(
                    row, text="Delete", bg="#990000", fg="white",
                    command=lambda i=idx: on_delete(i),
                ).pack(side="right")

        def on_delete(index: int) -> None:
            self.session.delete_event(key, index)
            fill_listing()
            self.render()

        entry = tk.Entry(frame, width=32, font=self.font_normal)
        entry.pack(fill="x")
        entry.focus_set()

        options = tk.Frame(frame)
        options.pack(fill="x", pady=(6, 0))
        use_hour = tk.BooleanVar(value=hour is not None)
        hour_var = tk.StringVar(value=str(hour if hour is not None else 9))
        spin = tk.Spinbox(
            options, from_=0, to=23, width=4, textvariable=hour_var,
            font=self.font_normal,
            state="normal" if hour is not None else "disabled",
        )

        def toggle_hour() -> None:
            spin.configure(state="normal" if use_hour.get() else "disabled")

        tk.Checkbutton(
            options, text="At hour", variable=use_hour, command=toggle_hour,
            font=self.font_normal,
        ).pack(side="left")
        spin.pack(side="left", padx=(4, 12))
        yearly = tk.BooleanVar(value=False)
        tk.Checkbutton(
            options, text="Repeat yearly", variable=yearly, font=self.font_normal,
        ).pack(side="left")

        def on_add(_event=None) -> None:
            text = entry.get()
            if not text.strip():
                messagebox.showwarning("Pocket Calendar", "Enter event text",
                                       parent=dlg)
                return
            chosen: int | None = None
            if use_hour.get():
                try:
                    chosen = max(0, min(23, int(hour_var.get())))
                except ValueError:
                    chosen = None
            self.session.add_event(key, text, hour=chosen, yearly=yearly.get())
            dlg.destroy()
            self.render()

        btn_frame = tk.Frame(frame)
        btn_frame.pack(pady=(8, 0))
        tk.Button(btn_frame, text="Add", width=8, command=on_add).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Close", width=8, command=dlg.destroy).pack(
            side="left", padx=4,
        )
        entry.bind("<Return>", on_add)
        dlg.bind("<Escape>", lambda _e: dlg.destroy())

        fill_listing()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _navigate(self, direction: int) -> None:
        if direction < 0:
            self.session.go_previous()
        else:
            self.session.go_next()
        self.render()

    def _set_view(self, mode: str) -> None:
        self.session.set_view(mode)
        self.render()

    def _open_month(self, year: int, month: int) -> None:
        self.session.current_date = date(year, month, 1)
        self._set_view("month")

    def _go_today(self) -> None:
        self.session.go_today()
        self.render()

    def go_today(self) -> None:
        self._go_today()
        self.show()

    # ------------------------------------------------------------------
    # Day rollover, checked once a minute
    # ------------------------------------------------------------------
    def _check_rollover(self) -> None:
        if self.session.check_rollover():
            self.root.title(self._title())
            self.render()
        self.root.after(ROLLOVER_MS, self._check_rollover)

    # ------------------------------------------------------------------
    # Persist window size and view
    # ------------------------------------------------------------------
    def _persist(self) -> None:
        self._saved_width = self.root.winfo_width()
        self._saved_height = self.root.winfo_height()
        settings = load_settings()
        settings["view"] = self.session.view
        settings["window_width"] = self._saved_width
        settings["window_height"] = self._saved_height
        try:
            save_settings(settings)
        except OSError:
            logger.exception("Could not save window settings")

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.root.title(self._title())
        self.render()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        if self.root.winfo_viewable():
            self._persist()
        self._tooltip.hide()
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position bottom-right of the screen
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        if self._saved_width and self._saved_height:
            win_w, win_h = self._saved_width, self._saved_height
        else:
            win_w = self.root.winfo_reqwidth()
            win_h = self.root.winfo_reqheight()
        x = self.root.winfo_screenwidth() - win_w - 12
        y = self.root.winfo_screenheight() - win_h - 60
        self.root.geometry(f"{win_w}x{win_h}+{max(0, x)}+{max(0, y)}")
