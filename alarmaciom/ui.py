"""The alarm clock window, the controller behind it and the ringing loop."""

from __future__ import annotations

import argparse
import sys
import threading
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from .model import (
    MAX_NAME,
    MAX_TIME,
    Alarm,
    AlarmBook,
    AlarmError,
    AlarmNotFoundError,
    default_config_path,
    load_alarms,
    save_alarms,
)
from .schedule import clock_text, due_alarms, list_label

DAY_LETTERS = ("D", "L", "M", "M", "J", "V", "S")
TICK_MS = 1000
WINDOW_TITLE = "AlarmaCIOM"


def _terminal_bell() -> None:
    sys.stdout.write("\a")
    sys.stdout.flush()


class Ringer:
    """Plays the alarm sound over and over on a background thread until stopped."""

    def __init__(
        self,
        play: Callable[[], None] | None = None,
        interval: float = 1.0,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self._play = play or _terminal_bell
        self._interval = interval
        self._on_error = on_error
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> bool:
        """Begin ringing; False if it is already ringing."""
        with self._lock:
            if self.is_ringing():
                return False
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._loop,
                args=(self._stop_event,),
                name="alarm-ringer",
                daemon=True,
            )
            self._thread.start()
            return True

    def stop(self) -> None:
        """Stop ringing and wait for the sound loop to end."""
        with self._lock:
            thread = self._thread
            self._stop_event.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def is_ringing(self) -> bool:
        """Whether the sound loop is running."""
        return self._thread is not None and self._thread.is_alive()

    def _loop(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                self._play()
            except Exception as exc:  # the sound backend may fail in any way
                message = f"Fallo la reproducción de audio: {exc}"
                print(f"[ERROR] {message}", file=sys.stderr)
                if self._on_error is not None:
                    self._on_error(message)
                return
            stop_event.wait(self._interval)


class AlarmController:
    """Keeps the alarm book, saves every change and rings alarms that are due."""

    def __init__(
        self,
        book: AlarmBook | None = None,
        path: str | Path | None = None,
        ringer: Ringer | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else default_config_path()
        self.book = book if book is not None else AlarmBook(load_alarms(self.path))
        self.ringer = ringer if ringer is not None else Ringer()

    def _save(self) -> None:
        save_alarms(self.book, self.path)

    def add(self, name: str, time: str, days: Sequence[object]) -> Alarm:
        """Create an active alarm and save the book."""
        alarm = self.book.add(name, time, days)
        self._save()
        return alarm

    def edit(
        self,
        alarm_id: int,
        name: str | None,
        time: str | None,
        active: bool,
        days: Sequence[object] | None,
    ) -> Alarm:
        """Change an alarm and save the book."""
        alarm = self.book.update(alarm_id, name, time, active, days)
        self._save()
        return alarm

    def delete(self, alarm_id: int) -> Alarm:
        """Remove an alarm and save the book."""
        alarm = self.book.remove(alarm_id)
        self._save()
        return alarm

    def check(self, moment: datetime | None = None) -> Alarm | None:
        """Start ringing for the first alarm due now; None if none starts."""
        due = due_alarms(self.book, moment)
        if not due or not self.ringer.start():
            return None
        return due[0]

    def acknowledge(self, alarm_id: int) -> Alarm:
        """Silence the ringing; a one-off alarm is switched off and saved."""
        self.ringer.stop()
        alarm = self.book.find(alarm_id)
        if alarm is None:
            raise AlarmNotFoundError(alarm_id)
        if not alarm.is_repeating():
            alarm.active = False
            self._save()
        return alarm


class AlarmApp:
    """The main window: a live clock, the alarm list and add/edit dialogs."""

    def __init__(
        self,
        controller: AlarmController | None = None,
        clock: Callable[[], datetime] | None = None,
        announce: Callable[[Alarm], None] | None = None,
    ) -> None:
        self.controller = controller if controller is not None else AlarmController()
        self._clock = clock or datetime.now
        self._announce = announce
        self._tk: Any = None
        self._messagebox: Any = None
        self._root: Any = None
        self._clock_var: Any = None
        self._list_frame: Any = None

    def run(self) -> None:
        """Build the window and run until it is closed."""
        import tkinter as tk
        from tkinter import messagebox, ttk

        self._tk = tk
        self._messagebox = messagebox
        root = tk.Tk()
        self._root = root
        root.title(WINDOW_TITLE)
        root.geometry("480x520")

        tk.Label(
            root,
            text="⏰ AlarmaCIOM",
            font=("TkDefaultFont", 22, "bold"),
            fg="#2E86C1",
        ).pack(pady=(18, 8))

        self._clock_var = tk.StringVar(value="")
        tk.Label(
            root, textvariable=self._clock_var, font=("TkDefaultFont", 32, "bold")
        ).pack(pady=(10, 18))

        ttk.Separator(root, orient="horizontal").pack(fill="x")

        self._list_frame = tk.Frame(root)
        self._list_frame.pack(fill="both", expand=True, pady=10)

        tk.Button(
            root,
            text="＋ Agregar alarma",
            bg="#27ae60",
            fg="#ffffff",
            activebackground="#229954",
            activeforeground="#ffffff",
            font=("TkDefaultFont", 11, "bold"),
            padx=16,
            pady=8,
            command=self._open_dialog,
        ).pack()

        self.refresh()
        root.after(TICK_MS, self._on_timer)
        try:
            root.mainloop()
        finally:
            self.controller.ringer.stop()
            self._root = None
            self._clock_var = None
            self._list_frame = None

    def refresh(self) -> list[str]:
        """Rebuild the alarm list and return the text of each row."""
        labels = [list_label(alarm) for alarm in self.controller.book]
        if self._list_frame is None:
            return labels
        tk = self._tk
        for child in self._list_frame.winfo_children():
            child.destroy()
        for alarm, text in zip(list(self.controller.book), labels):
            row = tk.Frame(self._list_frame)
            row.pack(fill="x", padx=8, pady=4)
            tk.Label(row, text=text, font=("TkDefaultFont", 13), anchor="w").pack(
                side="left", fill="x", expand=True
            )
            tk.Button(
                row, text="Editar", command=lambda i=alarm.id: self._edit(i)
            ).pack(side="left", padx=4)
            tk.Button(
                row, text="Eliminar", command=lambda i=alarm.id: self._delete(i)
            ).pack(side="left", padx=4)
        return labels

    def tick(self) -> str:
        """Update the clock, ring any due alarm, and return the clock text."""
        moment = self._clock()
        text = clock_text(moment)
        if self._clock_var is not None:
            self._clock_var.set(text)
        alarm = self.controller.check(moment)
        if alarm is not None:
            self._ring(alarm)
        return text

    def _on_timer(self) -> None:
        self.tick()
        if self._root is not None:
            self._root.after(TICK_MS, self._on_timer)

    def _ring(self, alarm: Alarm) -> None:
        if self._announce is not None:
            self._announce(alarm)
        else:
            self._messagebox.showinfo(
                "¡Alarma!", "¡La alarma está sonando!", parent=self._root
            )
        try:
            self.controller.acknowledge(alarm.id)
        except AlarmError:
            self.controller.ringer.stop()
        self.refresh()

    def _show_error(self, message: str) -> None:
        if self._messagebox is not None:
            self._messagebox.showerror(WINDOW_TITLE, message, parent=self._root)
        else:
            print(f"[ERROR] {message}", file=sys.stderr)

    def _edit(self, alarm_id: int) -> None:
        alarm = self.controller.book.find(alarm_id)
        if alarm is not None:
            self._open_dialog(alarm)

    def _delete(self, alarm_id: int) -> None:
        try:
            self.controller.delete(alarm_id)
        except AlarmError:
            pass
        except OSError as exc:
            self._show_error(f"No se pudieron guardar las alarmas: {exc}")
        self.refresh()

    def _open_dialog(self, alarm: Alarm | None = None) -> None:
        tk = self._tk
        editing = alarm is not None
        dialog = tk.Toplevel(self._root)
        dialog.title("Editar alarma" if editing else "Agregar alarma")
        dialog.transient(self._root)

        def limiter(limit: int) -> tuple[str, str]:
            return (dialog.register(lambda proposed: len(proposed) <= limit), "%P")

        name_var = tk.StringVar(value=alarm.name if alarm else "")
        time_var = tk.StringVar(value=alarm.time if alarm else "")
        active_var = tk.BooleanVar(value=alarm.active if alarm else True)
        day_vars = [
            tk.BooleanVar(value=alarm.days[day] if alarm else day != 0)
            for day in range(7)
        ]

        tk.Label(dialog, text="Nombre:").grid(row=0, column=0, sticky="w", padx=6, pady=3)
        tk.Entry(
            dialog,
            textvariable=name_var,
            validate="key",
            validatecommand=limiter(MAX_NAME - 1),
        ).grid(row=0, column=1, columnspan=2, sticky="ew", padx=6, pady=3)

        tk.Label(dialog, text="Hora (HH:MM):").grid(row=1, column=0, sticky="w", padx=6, pady=3)
        tk.Entry(
            dialog,
            textvariable=time_var,
            validate="key",
            validatecommand=limiter(MAX_TIME - 1),
        ).grid(row=1, column=1, columnspan=2, sticky="ew", padx=6, pady=3)

        tk.Label(dialog, text="Activa:").grid(row=2, column=0, sticky="w", padx=6, pady=3)
        tk.Checkbutton(dialog, variable=active_var).grid(row=2, column=1, sticky="w", padx=6)

        tk.Label(dialog, text="Días:").grid(row=3, column=0, sticky="w", padx=6, pady=3)
        days_frame = tk.Frame(dialog)
        days_frame.grid(row=3, column=1, columnspan=2, sticky="w", padx=6)
        for letter, variable in zip(DAY_LETTERS, day_vars):
            tk.Checkbutton(days_frame, text=letter, variable=variable).pack(side="left")

        def accept() -> None:
            days = [variable.get() for variable in day_vars]
            try:
                if alarm is not None:
                    self.controller.edit(
                        alarm.id, name_var.get(), time_var.get(), active_var.get(), days
                    )
                else:
                    self.controller.add(name_var.get(), time_var.get(), days)
            except AlarmError as exc:
                self._show_error(f"No se pudo guardar la alarma: {exc}")
            except OSError as exc:
                self._show_error(f"No se pudieron guardar las alarmas: {exc}")
            dialog.destroy()
            self.refresh()

        buttons = tk.Frame(dialog)
        buttons.grid(row=4, column=0, columnspan=3, pady=8)
        tk.Button(buttons, text="Guardar" if editing else "Agregar", command=accept).pack(
            side="left", padx=4
        )
        tk.Button(buttons, text="Cancelar", command=dialog.destroy).pack(side="left", padx=4)

        dialog.grab_set()
        self._root.wait_window(dialog)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the alarm clock window."""
    parser = argparse.ArgumentParser(prog="alarmaciom", description="Desktop alarm clock.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="alarm file to use instead of the one in the home directory",
    )
    args = parser.parse_args(argv)
    AlarmApp(AlarmController(path=args.config)).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())