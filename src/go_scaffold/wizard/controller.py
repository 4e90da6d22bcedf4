"""
go-scaffold Wizard Controller

A single-threaded state machine for the wizard. Every input (key press,
resize, timer tick, background completion) goes through handle(), which
mutates the controller's own state and returns the effects the caller
must carry out. The controller itself never touches the filesystem,
the terminal or other threads.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from go_scaffold.generator.materializer import ProjectSpec
from go_scaffold.wizard.exceptions import ScaffoldError, ValidationError
from go_scaffold.wizard.features import DependencyResolver, Feature
from go_scaffold.wizard.logging_config import get_logger
from go_scaffold.wizard.validators import (
    DEFAULT_PROJECT_PATH,
    default_module_name,
    validate_module_name,
    validate_path,
    validate_project_name,
)


logger = get_logger("controller")


class WizardState(Enum):
    """The screen the wizard is currently showing."""
    MAIN_MENU = "main_menu"
    WELCOME = "welcome"
    PROJECT_NAME = "project_name"
    MODULE_NAME = "module_name"
    PROJECT_PATH = "project_path"
    FEATURES = "features"
    CONFIRM = "confirm"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


TEXT_STATES = (WizardState.PROJECT_NAME, WizardState.MODULE_NAME, WizardState.PROJECT_PATH)

# Character limits of the three text inputs
INPUT_LIMITS = {
    WizardState.PROJECT_NAME: 50,
    WizardState.MODULE_NAME: 100,
    WizardState.PROJECT_PATH: 200,
}

MIN_WIDTH = 60
MIN_HEIGHT = 20

EXIT_ABORTED = 130


# -- Events -----------------------------------------------------------------

@dataclass(frozen=True)
class KeyEvent:
    """A normalized key: 'up', 'down', 'enter', 'space', 'backspace', 'esc',
    'ctrl_c', 'tab', or a single printable character."""
    key: str


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class TickEvent:
    pass


@dataclass(frozen=True)
class DoneEvent:
    """Result of the background materialization."""
    message: str = ""
    error: Optional[BaseException] = None


Event = Union[KeyEvent, ResizeEvent, TickEvent, DoneEvent]


# -- Effects ----------------------------------------------------------------

@dataclass(frozen=True)
class QuitEffect:
    exit_code: int = 0


@dataclass(frozen=True)
class MaterializeEffect:
    spec: ProjectSpec


Effect = Union[QuitEffect, MaterializeEffect]


@dataclass(frozen=True)
class MenuItem:
    label: str
    description: str
    action: str


MAIN_MENU_ITEMS = [
    MenuItem("Create New Project", "Create project from template with feature selection", "create"),
    MenuItem("Help", "View keyboard shortcuts and documentation", "help"),
    MenuItem("Exit", "Exit the scaffolder", "exit"),
]


class WizardController:
    """Owns the wizard's screen state, text inputs and feature selection."""

    def __init__(self, resolver: Optional[DependencyResolver] = None):
        self.resolver = resolver or DependencyResolver()
        self.state = WizardState.MAIN_MENU
        self.menu_items = list(MAIN_MENU_ITEMS)
        self.menu_focus = 0
        self.show_help = False

        self.inputs: Dict[WizardState, str] = {state: "" for state in TEXT_STATES}
        self.project_name = ""
        self.module_name = ""
        self.project_path = DEFAULT_PROJECT_PATH

        self.feature_focus = 0
        self.warning = ""

        self.spec: Optional[ProjectSpec] = None
        self.error: Optional[BaseException] = None
        self.message = ""

        self.width = 80
        self.height = 24
        self.spinner_frame = 0

        self._key_handlers: Dict[WizardState, Callable[[str], List[Effect]]] = {
            WizardState.MAIN_MENU: self._on_main_menu_key,
            WizardState.WELCOME: self._on_welcome_key,
            WizardState.PROJECT_NAME: self._on_project_name_key,
            WizardState.MODULE_NAME: self._on_module_name_key,
            WizardState.PROJECT_PATH: self._on_project_path_key,
            WizardState.FEATURES: self._on_features_key,
            WizardState.CONFIRM: self._on_confirm_key,
            WizardState.PROCESSING: self._on_processing_key,
            WizardState.SUCCESS: self._on_success_key,
            WizardState.ERROR: self._on_error_key,
        }

    # -- Read-only views ----------------------------------------------------

    @property
    def features(self) -> List[Feature]:
        return self.resolver.features

    @property
    def error_message(self) -> str:
        if self.error is None:
            return ""
        if isinstance(self.error, ScaffoldError):
            return self.error.message
        return str(self.error)

    def input_value(self, state: WizardState) -> str:
        return self.inputs.get(state, "")

    def current_spec(self) -> ProjectSpec:
        """The confirmed spec, or one built from the answers so far."""
        if self.spec is not None:
            return self.spec
        return ProjectSpec(
            project_name=self.project_name,
            module_name=self.module_name,
            target_path=self.project_path,
            selected_features=frozenset(self.resolver.selected_names()),
        )

    # -- Dispatch -----------------------------------------------------------

    def handle(self, event: Event) -> Tuple[WizardState, List[Effect]]:
        """Apply one event.

        Returns:
            Tuple of (new state, effects for the caller to perform)
        """
        if isinstance(event, KeyEvent):
            effects = self._on_key(event.key)
        elif isinstance(event, ResizeEvent):
            self.width = max(event.width, MIN_WIDTH)
            self.height = max(event.height, MIN_HEIGHT)
            effects = []
        elif isinstance(event, TickEvent):
            if self.state == WizardState.PROCESSING:
                self.spinner_frame += 1
            effects = []
        elif isinstance(event, DoneEvent):
            effects = self._on_done(event)
        else:
            raise TypeError(f"Unsupported wizard event: {event!r}")

        return self.state, effects

    def _on_key(self, key: str) -> List[Effect]:
        if key == "ctrl_c":
            logger.debug("Aborted from %s", self.state.value)
            return [QuitEffect(EXIT_ABORTED)]
        return self._key_handlers[self.state](key)

    def _on_done(self, event: DoneEvent) -> List[Effect]:
        if self.state != WizardState.PROCESSING:
            logger.debug("Ignoring completion outside processing state")
            return []

        if event.error is not None:
            self.error = event.error
            self._go(WizardState.ERROR)
        else:
            self.message = event.message
            self._go(WizardState.SUCCESS)
        return []

    def _go(self, state: WizardState):
        logger.debug("%s -> %s", self.state.value, state.value)
        self.state = state

    # -- Per-state key handlers ---------------------------------------------

    def _on_main_menu_key(self, key: str) -> List[Effect]:
        if self.show_help:
            if key in ("esc", "enter", "q"):
                self.show_help = False
            return []

        if key == "up":
            self.menu_focus = (self.menu_focus - 1) % len(self.menu_items)
        elif key == "down":
            self.menu_focus = (self.menu_focus + 1) % len(self.menu_items)
        elif key == "enter":
            action = self.menu_items[self.menu_focus].action
            if action == "create":
                self._go(WizardState.WELCOME)
            elif action == "help":
                self.show_help = True
            elif action == "exit":
                return [QuitEffect(0)]
        return []

    def _on_welcome_key(self, key: str) -> List[Effect]:
        if key == "enter":
            self._go(WizardState.PROJECT_NAME)
        return []

    def _on_project_name_key(self, key: str) -> List[Effect]:
        if key != "enter":
            self._edit_input(key)
            return []

        name = self.inputs[WizardState.PROJECT_NAME].strip()
        valid, message = validate_project_name(name)
        if not valid:
            return self._fail(ValidationError(
                message,
                field="project name",
                expected_format="lowercase letters, numbers, '-' and '_' (max 50)"
            ))

        self.project_name = name
        self.inputs[WizardState.MODULE_NAME] = ""
        self._go(WizardState.MODULE_NAME)
        return []

    def _on_module_name_key(self, key: str) -> List[Effect]:
        if key != "enter":
            self._edit_input(key)
            return []

        module = self.inputs[WizardState.MODULE_NAME].strip()
        if not module:
            module = default_module_name(self.project_name)

        valid, message = validate_module_name(module)
        if not valid:
            return self._fail(ValidationError(
                message,
                field="module name",
                expected_format="domain.com/org/project"
            ))

        self.module_name = module
        self.inputs[WizardState.PROJECT_PATH] = DEFAULT_PROJECT_PATH
        self._go(WizardState.PROJECT_PATH)
        return []

    def _on_project_path_key(self, key: str) -> List[Effect]:
        if key != "enter":
            self._edit_input(key)
            return []

        path = self.inputs[WizardState.PROJECT_PATH].strip() or DEFAULT_PROJECT_PATH
        valid, message = validate_path(path)
        if not valid:
            return self._fail(ValidationError(
                message,
                field="project path",
                expected_format="., ./projects or ../projects"
            ))

        self.project_path = path
        self.feature_focus = 0
        self._go(WizardState.FEATURES)
        return []

    def _on_features_key(self, key: str) -> List[Effect]:
        count = len(self.features)
        if key == "up":
            self.feature_focus = (self.feature_focus - 1) % count
        elif key == "down":
            self.feature_focus = (self.feature_focus + 1) % count
        elif key == "space":
            feature = self.features[self.feature_focus]
            self.resolver.toggle(feature.name)
            self.warning = self.resolver.dependency_warning()
        elif key == "enter":
            self._go(WizardState.CONFIRM)
        return []

    def _on_confirm_key(self, key: str) -> List[Effect]:
        if key == "enter":
            self.spec = self.current_spec()
            self.spinner_frame = 0
            self._go(WizardState.PROCESSING)
            return [MaterializeEffect(self.spec)]
        if key in ("esc", "n", "q"):
            return [QuitEffect(1)]
        return []

    def _on_processing_key(self, key: str) -> List[Effect]:
        return []

    def _on_success_key(self, key: str) -> List[Effect]:
        if key in ("enter", "q"):
            return [QuitEffect(0)]
        return []

    def _on_error_key(self, key: str) -> List[Effect]:
        if key == "q":
            return [QuitEffect(1)]
        if key == "enter":
            self._reset()
            self._go(WizardState.WELCOME)
        return []

    # -- Helpers ------------------------------------------------------------

    def _edit_input(self, key: str):
        value = self.inputs[self.state]
        if key == "backspace":
            self.inputs[self.state] = value[:-1]
            return

        char = " " if key == "space" else key
        if len(char) != 1 or not char.isprintable():
            return
        if len(value) >= INPUT_LIMITS[self.state]:
            return
        self.inputs[self.state] = value + char

    def _fail(self, error: ScaffoldError) -> List[Effect]:
        logger.debug("Validation failed in %s: %s", self.state.value, error.message)
        self.error = error
        self._go(WizardState.ERROR)
        return []

    def _reset(self):
        """Forget collected input after an error is acknowledged."""
        for state in TEXT_STATES:
            self.inputs[state] = ""
        self.project_name = ""
        self.module_name = ""
        self.project_path = DEFAULT_PROJECT_PATH
        self.spec = None
        self.error = None
        self.message = ""
