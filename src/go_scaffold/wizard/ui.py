"""
go-scaffold Wizard UI Components

Rich renderables for each wizard screen, plus the plain message helpers the
non-interactive commands use.
"""

from typing import List, Optional

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from go_scaffold.help_topics import WIZARD_HELP_TEXT
from go_scaffold.wizard.controller import WizardController, WizardState
from go_scaffold.wizard.features import API_DOCS, BASE_HIGHLIGHTS, FEATURE_HIGHLIGHTS
from go_scaffold.wizard.validators import default_module_name, is_valid_module_name, is_valid_project_name


CONTAINER_WIDTH = 70
TOTAL_STEPS = 5

SPINNER_FRAMES = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"]

LOGO = """\
 ██████╗  ██████╗     ███████╗ ██████╗ █████╗ ███████╗
██╔════╝ ██╔═══██╗    ██╔════╝██╔════╝██╔══██╗██╔════╝
██║  ███╗██║   ██║    ███████╗██║     ███████║█████╗
██║   ██║██║   ██║    ╚════██║██║     ██╔══██║██╔══╝
╚██████╔╝╚██████╔╝    ███████║╚██████╗██║  ██║██║
 ╚═════╝  ╚═════╝     ╚══════╝ ╚═════╝╚═╝  ╚═╝╚═╝"""


class WizardUI:
    """UI components for the go-scaffold wizard."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    # -- Message helpers ----------------------------------------------------

    def print_header(self, title: str = "Go Platform Template Scaffolder"):
        """Print the scaffolder header."""
        self.console.print()
        self.console.print(Panel(
            f"[bold blue]{title}[/bold blue]",
            border_style="blue",
            padding=(0, 2)
        ))
        self.console.print()

    def print_success(self, message: str):
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str):
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str):
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str):
        """Print an info message."""
        self.console.print(f"[blue]→[/blue] {message}")

    # -- Screens ------------------------------------------------------------

    def render(self, wizard: WizardController) -> RenderableType:
        """Render the screen for the controller's current state."""
        screens = {
            WizardState.MAIN_MENU: self._help if wizard.show_help else self._main_menu,
            WizardState.WELCOME: self._welcome,
            WizardState.PROJECT_NAME: self._project_name,
            WizardState.MODULE_NAME: self._module_name,
            WizardState.PROJECT_PATH: self._project_path,
            WizardState.FEATURES: self._features,
            WizardState.CONFIRM: self._confirm,
            WizardState.PROCESSING: self._processing,
            WizardState.SUCCESS: self._success,
            WizardState.ERROR: self._error,
        }
        return screens[wizard.state](wizard)

    def _main_menu(self, wizard: WizardController) -> RenderableType:
        menu = Table.grid(padding=(0, 1))
        menu.add_column(width=2)
        menu.add_column()
        for i, item in enumerate(wizard.menu_items):
            if i == wizard.menu_focus:
                menu.add_row("[bold cyan]▶[/bold cyan]", f"[bold cyan]{item.label}[/bold cyan]")
            else:
                menu.add_row("", item.label)
            menu.add_row("", f"[dim]{item.description}[/dim]")

        return Group(
            Text(LOGO, style="cyan"),
            Text(),
            Text("Go Platform Template", style="bold"),
            Text("Production-Ready Go API Framework", style="dim"),
            Text(),
            Text("Choose an option:", style="blue"),
            menu,
            Text(),
            Text("↑/↓ Navigate • ENTER Select • CTRL+C Quit", style="dim"),
        )

    def _help(self, wizard: WizardController) -> RenderableType:
        return Group(
            Text(LOGO, style="cyan"),
            Text(),
            Text("Help & Keyboard Shortcuts", style="bold"),
            Text(),
            Text(WIZARD_HELP_TEXT),
            Text(),
            Text("(Press ESC or ENTER to return to menu)", style="dim"),
        )

    def _welcome(self, wizard: WizardController) -> RenderableType:
        return Group(
            Text(LOGO, style="cyan"),
            Text(),
            Align.center(Text("Go Platform Template Scaffolder", style="bold")),
            Align.center(Text("Create a new production-ready Go project", style="dim")),
            Text(),
            Text("This wizard will help you set up a new Go project from the platform template."),
            Text("You'll be guided through a few simple steps."),
            Text(),
            Text("Press ENTER to begin • CTRL+C to exit", style="dim"),
        )

    def _project_name(self, wizard: WizardController) -> RenderableType:
        value = wizard.input_value(WizardState.PROJECT_NAME)
        if not value:
            hint = Text()
        elif is_valid_project_name(value):
            hint = Text("✓ Valid project name", style="green")
        else:
            hint = Text("✗ Invalid: use lowercase, numbers, hyphens, underscores", style="red")

        return self._form(
            "Project Name", 1,
            "Project Name:",
            value, "my-awesome-project",
            hint,
            "Examples: my-project, awesome_app, api2go",
        )

    def _module_name(self, wizard: WizardController) -> RenderableType:
        value = wizard.input_value(WizardState.MODULE_NAME)
        if not value:
            hint = Text("→ Will default to: " + default_module_name(wizard.project_name), style="blue")
        elif is_valid_module_name(value):
            hint = Text("✓ Valid module name", style="green")
        else:
            hint = Text("✗ Invalid: use 'domain.com/org/project' format", style="red")

        return self._form(
            "Go Module", 2,
            "Go Module Name (optional):",
            value, "github.com/org/my-project",
            hint,
            "Examples: github.com/acme/myapp, gitlab.com/team/project",
        )

    def _project_path(self, wizard: WizardController) -> RenderableType:
        value = wizard.input_value(WizardState.PROJECT_PATH)
        target = (value or ".").rstrip("/") or "."
        hint = Text(f"→ Project will be created at: {target}/{wizard.project_name}", style="blue")

        return self._form(
            "Project Location", 3,
            "Target directory (relative):",
            value, ".",
            hint,
            "Examples: ., ./projects, ../workspace",
        )

    def _features(self, wizard: WizardController) -> RenderableType:
        rows = Table.grid(padding=(0, 1))
        rows.add_column(width=2)
        rows.add_column(width=4)
        rows.add_column()
        rows.add_column(style="dim")
        for i, feature in enumerate(wizard.features):
            marker = "[bold cyan]>[/bold cyan]" if i == wizard.feature_focus else ""
            checkbox = "[green]\\[✓][/green]" if feature.selected else "[dim]\\[ ][/dim]"
            name = f"[bold]{feature.name}[/bold]" if i == wizard.feature_focus else feature.name
            rows.add_row(marker, checkbox, name, feature.description)

        selected = sum(1 for f in wizard.features if f.selected)
        body: List[RenderableType] = [
            Text("Choose features to include:", style="bold"),
            Text(),
            rows,
            Text(),
            Text.from_markup(f"[cyan]{selected}[/cyan] / {len(wizard.features)} features selected"),
        ]

        parts: List[RenderableType] = [self._step_header("Select Features", 4), self._container(Group(*body))]
        if wizard.warning:
            parts.append(Text(wizard.warning, style="yellow"))
        parts.append(Text("SPACE = Toggle  •  UP/DOWN = Navigate  •  ENTER = Next", style="dim"))
        return Group(*parts)

    def _confirm(self, wizard: WizardController) -> RenderableType:
        details = Table.grid(padding=(0, 2))
        details.add_column(style="cyan")
        details.add_column()
        details.add_row("Project Name", wizard.project_name)
        details.add_row("Go Module", wizard.module_name)
        details.add_row("Project Path", wizard.current_spec().display_path())

        selected = [f"✓ {f.name}" for f in wizard.features if f.selected] or ["(none)"]

        box = Panel(
            Group(
                Text("✓ Everything looks good!", style="bold green"),
                Text(),
                details,
                Text(),
                Text("Selected Features:", style="bold"),
                Text("\n".join(selected)),
            ),
            border_style="green",
            width=CONTAINER_WIDTH,
            padding=(1, 2),
        )

        return Group(
            self._step_header("Review & Confirm", 5),
            box,
            Text.from_markup("[bold reverse] → Create Project [/bold reverse]  or  [dim]ESC Cancel[/dim]"),
            Text(),
            Text("ENTER Create • ESC Cancel", style="dim"),
        )

    def _processing(self, wizard: WizardController) -> RenderableType:
        frame = SPINNER_FRAMES[wizard.spinner_frame % len(SPINNER_FRAMES)]
        return Group(
            self._step_header("Creating Project", 5),
            self._container(Group(
                Text(f"{frame} Processing...", style="cyan"),
                Text(),
                Text("Setting up project structure..."),
                Text("Creating directories and files..."),
                Text("Initializing git repository..."),
            )),
            Text("(This may take a moment)", style="dim"),
        )

    def _success(self, wizard: WizardController) -> RenderableType:
        spec = wizard.current_spec()
        full_path = spec.display_path()

        summary = Table.grid(padding=(0, 2))
        summary.add_column(style="cyan")
        summary.add_column()
        summary.add_row("Location", full_path)
        summary.add_row("Module", wizard.module_name)

        next_steps = [
            f"1. cd {full_path}",
            "2. cp .env.example .env",
            "3. make dev-d",
        ]
        if API_DOCS in spec.selected_features:
            next_steps.append("4. Visit http://localhost:8080/swagger")

        included = [
            f"✓ {FEATURE_HIGHLIGHTS[f.name]}"
            for f in wizard.features
            if f.selected and f.name in FEATURE_HIGHLIGHTS
        ]
        included.extend(f"✓ {item}" for item in BASE_HIGHLIGHTS)

        return Group(
            self._step_header("Success!", 5),
            Panel(
                Group(Text(f"✓ {wizard.message or 'Project created successfully!'}", style="bold green"), Text(), summary),
                border_style="green",
                width=CONTAINER_WIDTH,
            ),
            self._container(Group(Text("📋 Next Steps:", style="bold"), Text(), Text("\n".join(next_steps)))),
            self._container(Group(Text("🚀 Included Features:", style="bold"), Text(), Text("\n".join(included)))),
            Text("ENTER Exit • Q Quit", style="dim"),
        )

    def _error(self, wizard: WizardController) -> RenderableType:
        body = [Text(f"✗ {wizard.error_message}", style="bold red")]
        remediation = getattr(wizard.error, "remediation", None)
        if remediation:
            body.extend([Text(), Text(f"To fix: {remediation}", style="dim")])

        return Group(
            self._step_header("Error", 5),
            Panel(Group(*body), border_style="red", width=CONTAINER_WIDTH, padding=(1, 2)),
            Text("ENTER Try Again • Q Quit", style="dim"),
        )

    # -- Building blocks ----------------------------------------------------

    def _step_header(self, title: str, step: int) -> RenderableType:
        dots = " ".join("●" if i <= step else "○" for i in range(1, TOTAL_STEPS + 1))
        return Group(
            Text.from_markup(f"[bold cyan]Step {step}/{TOTAL_STEPS}:[/bold cyan] [bold]{title}[/bold]   [cyan]{dots}[/cyan]"),
            Text(),
        )

    def _container(self, content: RenderableType) -> RenderableType:
        return Panel(content, border_style="blue", width=CONTAINER_WIDTH, padding=(0, 2))

    def _form(
        self,
        title: str,
        step: int,
        label: str,
        value: str,
        placeholder: str,
        hint: Text,
        examples: str
    ) -> RenderableType:
        if value:
            field = Text.assemble(("> ", "bold cyan"), (value, "bold"), ("█", "cyan"))
        else:
            field = Text.assemble(("> ", "bold cyan"), ("█", "cyan"), (placeholder, "dim"))

        form = Group(
            Text(label, style="bold"),
            field,
            Text(),
            hint,
            Text(),
            Text(examples, style="dim"),
        )
        return Group(
            self._step_header(title, step),
            self._container(form),
            Text(),
            Text("ENTER Next • BACKSPACE Delete • CTRL+C Quit", style="dim"),
        )
