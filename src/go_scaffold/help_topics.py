"""
Progressive help system content for the go-scaffold CLI.

Provides the wizard's help screen and detailed topics accessible via
'go-scaffold help <topic>'.
"""

from typing import List, Tuple, Optional


# Shown inside the wizard; plain text because the live screen renders it verbatim
WIZARD_HELP_TEXT = """Navigation:
  ↑/↓           Navigate menu items
  ENTER         Select / Continue
  ESC           Close help / Cancel
  CTRL+C        Exit scaffolder

Creating a Project:
  1. Enter project name (lowercase, hyphens, underscores)
  2. Enter Go module name (optional, defaults to github.com/example/<name>)
  3. Choose target directory (relative path)
  4. Select features to include (SPACE to toggle)
  5. Review and confirm

Features:
  Features with dependencies are enabled automatically.
  Turning off a feature also turns off the features that need it."""


HELP_TOPICS = {
    "keyboard": {
        "description": "Keyboard shortcuts inside the wizard",
        "content": """
[bold]Wizard Keyboard Shortcuts[/bold]

[bold cyan]Everywhere:[/bold cyan]
  CTRL+C        Exit immediately (exit code 130)

[bold cyan]Menus and Lists:[/bold cyan]
  ↑ / ↓         Move the cursor (wraps around)
  ENTER         Select / Continue
  SPACE         Toggle a feature on the feature screen

[bold cyan]Text Fields:[/bold cyan]
  BACKSPACE     Delete the last character
  ENTER         Validate and continue

[bold cyan]Review Screen:[/bold cyan]
  ENTER         Create the project
  ESC / n / q   Cancel without creating anything
"""
    },

    "workflow": {
        "description": "What happens when a project is created",
        "content": """
[bold]Creating a Project[/bold]

[bold cyan]Wizard Steps:[/bold cyan]
  1. Project name     lowercase letters, numbers, '-' and '_' (max 50)
  2. Go module        e.g. github.com/acme/widget (optional)
  3. Location         relative path such as '.', './projects', '../work'
  4. Features         pick the optional parts of the template
  5. Review           confirm to start

[bold cyan]Generation:[/bold cyan]
  - Base template files are copied into <location>/<name>
  - Selected feature files are added on top
  - cmd/server/main.go and internal/app/routes.go are generated
  - Placeholder module and project names are replaced
  - A git repository with an initial commit is created

If anything fails before the git step, the partial project is removed.

[bold cyan]Without the Wizard:[/bold cyan]
  go-scaffold new my-api github.com/acme/my-api --path . -f "Database"
"""
    },

    "features": {
        "description": "Optional features and their dependencies",
        "content": """
[bold]Template Features[/bold]

[bold cyan]Catalog:[/bold cyan]
  [green]Authentication (JWT)[/green]  JWT-based auth with token rotation
  [green]User Management[/green]       User registration, profiles, RBAC
  [green]Database[/green]              PostgreSQL integration with migrations
  [green]File Storage[/green]          MinIO S3-compatible file storage
  [green]API Docs[/green]              Auto-generated Swagger documentation
  [green]Docker[/green]                Docker & Docker Compose setup

[bold cyan]Dependencies:[/bold cyan]
  User Management  requires  Authentication (JWT)
  File Storage     requires  Database

Selecting a feature selects what it requires. Deselecting a feature
deselects everything that depends on it.

Run 'go-scaffold features' for the same list as a table.
"""
    },

    "config": {
        "description": "Configuration file and environment variables",
        "content": """
[bold]Configuration[/bold]

[bold cyan]Config File (YAML):[/bold cyan]
  template_dir: ~/templates/go-platform
  log_file: ~/.go-scaffold.log
  debug: false
  git:
    enabled: true
    author_name: Developer
    author_email: dev@example.com
    commit_message: "Initial commit: created from go-platform-template"
  placeholders:
    module: go_platform_template
    name: go-platform-template

[bold cyan]Environment:[/bold cyan]
  GO_SCAFFOLD_CONFIG         Path to the config file
  GO_SCAFFOLD_TEMPLATE_DIR   Template tree with base/ and features/
  GO_SCAFFOLD_DEBUG          1/true/yes for verbose logging

Command-line flags override the environment, which overrides the file.
"""
    },

    "troubleshoot": {
        "description": "Diagnosing and fixing common issues",
        "content": """
[bold]Troubleshooting go-scaffold[/bold]

[bold cyan]"directory already exists":[/bold cyan]
  Choose another project name or location, or remove the directory.

[bold cyan]No git repository in the new project:[/bold cyan]
  git is optional. Install git, then run 'git init' in the project.

[bold cyan]Template errors:[/bold cyan]
  Check that GO_SCAFFOLD_TEMPLATE_DIR points at a directory with base/.

[bold cyan]Debug Mode:[/bold cyan]
  GO_SCAFFOLD_DEBUG=1 go-scaffold init --log-file scaffold.log
"""
    },
}


def list_topics() -> List[Tuple[str, str]]:
    """List all help topics with descriptions.

    Returns:
        List of (topic_name, description) tuples
    """
    return [(name, data["description"]) for name, data in HELP_TOPICS.items()]


def get_help_content(topic: str) -> Optional[str]:
    """Get help content for a topic.

    Args:
        topic: Topic name (case-insensitive)

    Returns:
        Help content string or None if topic not found
    """
    topic_data = HELP_TOPICS.get(topic.lower())
    return topic_data["content"] if topic_data else None


def get_topic_names() -> List[str]:
    return list(HELP_TOPICS.keys())
