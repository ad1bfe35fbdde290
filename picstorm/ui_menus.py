from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence, QShortcut

from .commands import CHECKABLE_COMMANDS, COMMAND_LABELS, DEFAULT_KEY_BINDINGS, Command
from .logger import get_logger

if TYPE_CHECKING:
    from .main import ImageViewer

_logger = get_logger("ui_menus")

_VIEW_MENU_LAYOUT: tuple[Command | None, ...] = (
    Command.TOGGLE_FIT,
    None,
    Command.ZOOM_IN,
    Command.ZOOM_OUT,
    Command.ZOOM_RESET,
    None,
    Command.ROTATE_RIGHT,
    Command.ROTATE_LEFT,
    None,
    Command.TOGGLE_DARK_MODE,
    Command.TOGGLE_FULLSCREEN,
)

_GO_MENU_LAYOUT: tuple[Command, ...] = (Command.NEXT_IMAGE, Command.PREVIOUS_IMAGE)


def _command_action(viewer: "ImageViewer", command: Command) -> QAction:
    action = QAction(COMMAND_LABELS[command], viewer)
    action.setShortcuts([QKeySequence(k) for k in DEFAULT_KEY_BINDINGS[command]])
    # Window-wide so shortcuts survive a hidden menu bar in fullscreen
    action.setShortcutContext(Qt.ShortcutContext.WindowShortcut)
    if command in CHECKABLE_COMMANDS:
        action.setCheckable(True)
    action.triggered.connect(lambda _checked=False, c=command: viewer.dispatch_command(c))
    viewer.addAction(action)
    viewer.command_actions[command] = action
    return action


def build_menus(viewer: "ImageViewer") -> None:
    """Build the menu bar and register one action per viewer command.

    - English UI text
    - Every command action is also added to the window itself
    - Checkable actions are kept in sync by ``sync_checks``
    """
    menu_bar = viewer.menuBar()

    # File menu
    file_menu = menu_bar.addMenu("File(&F)")
    open_action = QAction("Open Image...(&O)", viewer)
    open_action.setShortcut(QKeySequence("Ctrl+O"))
    open_action.setShortcutContext(Qt.ShortcutContext.WindowShortcut)
    open_action.triggered.connect(viewer.open_image)
    file_menu.addAction(open_action)
    viewer.addAction(open_action)

    file_menu.addSeparator()
    exit_action = QAction("Exit(&X)", viewer)
    exit_action.setShortcut(QKeySequence("Ctrl+Q"))
    exit_action.triggered.connect(viewer.close)
    file_menu.addAction(exit_action)
    viewer.addAction(exit_action)

    # View menu
    view_menu = menu_bar.addMenu("View(&V)")
    for command in _VIEW_MENU_LAYOUT:
        if command is None:
            view_menu.addSeparator()
        else:
            view_menu.addAction(_command_action(viewer, command))

    # Go menu
    go_menu = menu_bar.addMenu("Go(&G)")
    for command in _GO_MENU_LAYOUT:
        go_menu.addAction(_command_action(viewer, command))

    # Esc leaves fullscreen (no-op otherwise)
    try:
        viewer._shortcut_escape = QShortcut(QKeySequence(Qt.Key.Key_Escape), viewer)
        viewer._shortcut_escape.setContext(Qt.ShortcutContext.WindowShortcut)
        viewer._shortcut_escape.activated.connect(viewer.exit_fullscreen)
    except Exception as ex:
        _logger.debug("escape shortcut unavailable: %s", ex)

    sync_checks(viewer)


def sync_checks(viewer: "ImageViewer") -> None:
    """Mirror ViewState flags onto the checkable actions."""
    state = viewer.controller.state
    for command, attr in CHECKABLE_COMMANDS.items():
        action = viewer.command_actions.get(command)
        if action is None:
            continue
        checked = bool(getattr(state, attr))
        if action.isChecked() != checked:
            action.blockSignals(True)
            action.setChecked(checked)
            action.blockSignals(False)
