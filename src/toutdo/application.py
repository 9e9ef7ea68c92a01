"""Primary application entry point for Tout-Do."""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Dict, List, Optional

import gi  # type: ignore[import]

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")

from gi.repository import Adw, Gio, GLib, Gtk  # type: ignore[import]

from . import config
from .commands import CommandDispatcher
from .logger import configure_logging
from .notes import Note, NoteFile, NoteStore
from .notes.store import move_target
from .notifier import DesktopNotifier

_LOG = configure_logging()


def _clear_listbox(listbox: Gtk.ListBox) -> None:
    child = listbox.get_first_child()
    while child is not None:
        next_child = child.get_next_sibling()
        listbox.remove(child)
        child = next_child


def _icon_button(icon_name: str, tooltip: str) -> Gtk.Button:
    button = Gtk.Button(icon_name=icon_name)
    button.set_tooltip_text(tooltip)
    button.add_css_class("flat")
    button.set_valign(Gtk.Align.CENTER)
    return button


class NoteRow(Gtk.ListBoxRow):
    def __init__(self, window: "MainWindow", note: Note, position: int) -> None:
        super().__init__()
        self.note = note
        self.set_activatable(False)

        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        box.set_margin_top(6)
        box.set_margin_bottom(6)
        box.set_margin_start(12)
        box.set_margin_end(6)

        label = Gtk.Label(label=note.content, xalign=0)
        label.set_wrap(True)
        label.set_hexpand(True)
        label.set_selectable(True)
        if note.pinned:
            label.add_css_class("heading")
        box.append(label)

        pin_button = Gtk.ToggleButton(icon_name="view-pin-symbolic")
        pin_button.set_active(note.pinned)
        pin_button.set_tooltip_text("Unpin" if note.pinned else "Pin")
        pin_button.add_css_class("flat")
        pin_button.set_valign(Gtk.Align.CENTER)
        pin_button.connect("clicked", lambda _b: window.app.dispatch("toggle_pin", {"id": note.id}))
        box.append(pin_button)

        up_button = _icon_button("go-up-symbolic", "Move up")
        up_button.set_sensitive(window.can_move(position, -1))
        up_button.connect("clicked", lambda _b: window.move_note(position, -1))
        box.append(up_button)

        down_button = _icon_button("go-down-symbolic", "Move down")
        down_button.set_sensitive(window.can_move(position, 1))
        down_button.connect("clicked", lambda _b: window.move_note(position, 1))
        box.append(down_button)

        delete_button = _icon_button("user-trash-symbolic", "Delete")
        delete_button.add_css_class("destructive-action")
        delete_button.connect("clicked", lambda _b: window.app.dispatch("delete_note", {"id": note.id}))
        box.append(delete_button)

        self.set_child(box)


class MainWindow:
    """Controller for the notes window."""

    def __init__(self, app: "ToutDoApplication") -> None:
        self.app = app
        self._notes: List[Note] = []
        self.window = Adw.ApplicationWindow(application=app)
        self.window.set_title(config.APP_NAME)
        self.window.set_default_size(420, 640)
        self.window.connect("close-request", self._on_close_request)

        self.toast_overlay = Adw.ToastOverlay()
        self.window.set_content(self.toast_overlay)

        root = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        self.toast_overlay.set_child(root)

        self._build_header(root)
        self._build_body(root)

    def _build_header(self, root: Gtk.Box) -> None:
        header = Adw.HeaderBar()
        header.set_title_widget(Adw.WindowTitle(title=config.APP_NAME, subtitle="Notes"))

        menu = Gio.Menu()
        menu.append("Desktop notifications", "app.toggle_notifications")
        menu.append("Quit", "app.quit")
        menu_button = Gtk.MenuButton(icon_name="open-menu-symbolic")
        menu_button.set_tooltip_text("Main menu")
        menu_button.set_menu_model(menu)
        header.pack_end(menu_button)

        root.append(header)

    def _build_body(self, root: Gtk.Box) -> None:
        entry_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        entry_box.set_margin_top(12)
        entry_box.set_margin_start(12)
        entry_box.set_margin_end(12)
        entry_box.set_margin_bottom(6)

        self.entry = Gtk.Entry()
        self.entry.set_placeholder_text("New note…")
        self.entry.set_hexpand(True)
        self.entry.connect("activate", self._on_add_clicked)
        entry_box.append(self.entry)

        add_button = Gtk.Button(label="Add")
        add_button.add_css_class("suggested-action")
        add_button.connect("clicked", self._on_add_clicked)
        entry_box.append(add_button)
        root.append(entry_box)

        self.listbox = Gtk.ListBox()
        self.listbox.set_selection_mode(Gtk.SelectionMode.NONE)
        self.listbox.add_css_class("boxed-list")
        self.listbox.set_margin_start(12)
        self.listbox.set_margin_end(12)
        self.listbox.set_margin_bottom(12)
        self.listbox.set_valign(Gtk.Align.START)

        self.placeholder = Adw.StatusPage(
            icon_name="accessories-text-editor-symbolic",
            title="No notes yet",
            description="Type a note above and press Enter.",
        )
        self.placeholder.set_vexpand(True)

        self.stack = Gtk.Stack()
        scroller = Gtk.ScrolledWindow()
        scroller.set_vexpand(True)
        scroller.set_child(self.listbox)
        self.stack.add_named(scroller, "notes")
        self.stack.add_named(self.placeholder, "empty")
        root.append(self.stack)

    def present(self) -> None:
        self.window.present()

    def render(self, notes: List[Note]) -> None:
        self._notes = list(notes)
        _clear_listbox(self.listbox)
        for position, note in enumerate(self._notes):
            self.listbox.append(NoteRow(self, note, position))
        self.stack.set_visible_child_name("notes" if self._notes else "empty")

    def can_move(self, position: int, offset: int) -> bool:
        return move_target(self._notes, position, offset, self.app.store.pin_first) is not None

    def move_note(self, position: int, offset: int) -> None:
        target = move_target(self._notes, position, offset, self.app.store.pin_first)
        if target is None:
            return
        ids = [note.id for note in self._notes]
        ids[position], ids[target] = ids[target], ids[position]
        self.app.dispatch("reorder_notes", {"ordered_ids": ids})

    def show_error(self, message: str) -> None:
        toast = Adw.Toast.new(message)
        toast.set_priority(Adw.ToastPriority.HIGH)
        toast.set_timeout(5)
        self.toast_overlay.add_toast(toast)

    def _on_add_clicked(self, _widget: Gtk.Widget) -> None:
        content = self.entry.get_text()
        if not content.strip():
            return
        self.app.dispatch("add_note", {"content": content})
        self.entry.set_text("")

    def _on_close_request(self, _window: Adw.ApplicationWindow) -> bool:
        # keep running in the background; "app.show" or a relaunch brings it back
        self.window.set_visible(False)
        return True


class ToutDoApplication(Adw.Application):
    def __init__(self) -> None:
        super().__init__(application_id=config.APP_ID, flags=Gio.ApplicationFlags.FLAGS_NONE)
        self.store = NoteStore(NoteFile(), pin_first=config.PIN_FIRST)
        self.dispatcher = CommandDispatcher(self.store)
        self.notifier = DesktopNotifier(self._send_desktop_notification, enabled=config.NOTIFICATIONS_ENABLED)
        self.main_window: Optional[MainWindow] = None
        self._notifications_action: Optional[Gio.SimpleAction] = None
        self.store.add_listener(self._on_notes_updated)

    def do_startup(self) -> None:  # type: ignore[override]
        Adw.Application.do_startup(self)
        self._install_actions()
        # the window hides on close; only app.quit ends the process
        self.hold()
        self.notifier.notify(config.APP_NAME, "The application has started")

    def do_activate(self) -> None:  # type: ignore[override]
        if not self.main_window:
            self.main_window = MainWindow(self)
            self.main_window.render(self.store.list_notes())
        self.main_window.present()

    def do_shutdown(self) -> None:  # type: ignore[override]
        _LOG.info("Shutting down application")
        self.store.remove_listener(self._on_notes_updated)
        self.dispatcher.shutdown()
        Adw.Application.do_shutdown(self)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def _install_actions(self) -> None:
        self._add_command_action("add_note", "s", lambda value: {"content": value})
        self._add_command_action("delete_note", "x", lambda value: {"id": value})
        self._add_command_action("toggle_pin", "x", lambda value: {"id": value})
        self._add_command_action("reorder_notes", "ax", lambda value: {"ordered_ids": list(value)})
        self._add_simple_action("show", self._action_show)
        self._add_simple_action("quit", self.quit)

        action = Gio.SimpleAction.new_stateful(
            "toggle_notifications", None, GLib.Variant.new_boolean(self.notifier.enabled)
        )
        action.connect("activate", self._on_toggle_notifications)
        self.add_action(action)
        self._notifications_action = action

        self.set_accels_for_action("app.quit", ["<Primary>q"])

    def _add_simple_action(self, name: str, callback) -> None:
        action = Gio.SimpleAction.new(name, None)
        action.connect("activate", lambda _a, _p: callback())
        self.add_action(action)

    def _add_command_action(self, name: str, signature: str, build_args) -> None:
        action = Gio.SimpleAction.new(name, GLib.VariantType.new(signature))
        action.connect("activate", lambda _a, param: self.dispatch(name, build_args(param.unpack())))
        self.add_action(action)

    def _action_show(self) -> None:
        self.activate()

    def _on_toggle_notifications(self, action: Gio.SimpleAction, _param: Any) -> None:
        enabled = self.notifier.toggle()
        action.set_state(GLib.Variant.new_boolean(enabled))

    # ------------------------------------------------------------------
    # Command plumbing
    # ------------------------------------------------------------------
    def dispatch(self, name: str, args: Dict[str, Any]) -> None:
        self.dispatcher.submit(name, args, callback=self._on_command_done)

    def _on_command_done(self, future: "Future[Any]") -> None:
        exc = future.exception()
        if exc is not None:
            _LOG.error("Note command failed: %s", exc)
            GLib.idle_add(self._show_error, str(exc))

    def _on_notes_updated(self, notes: List[Note]) -> None:
        # called from the store worker; widgets are only touched on the main loop
        GLib.idle_add(self._render_notes, notes)

    def _render_notes(self, notes: List[Note]) -> bool:
        if self.main_window:
            self.main_window.render(notes)
        return GLib.SOURCE_REMOVE

    def _show_error(self, message: str) -> bool:
        if self.main_window:
            self.main_window.show_error(message)
        return GLib.SOURCE_REMOVE

    def _send_desktop_notification(self, title: str, body: str) -> None:
        notification = Gio.Notification.new(title)
        notification.set_body(body)
        self.send_notification(None, notification)


def run() -> None:
    app = ToutDoApplication()
    app.run(None)
