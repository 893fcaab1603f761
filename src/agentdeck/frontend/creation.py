"""Interactive steps for creating a new agent or skill."""

from pathlib import Path

import questionary
from rich.console import Console

from agentdeck.frontend.base import CreationResult, CreationScope
from agentdeck.utils.def_loader import is_valid_name


class BaseStep:
    """Base class for creation steps."""

    def __init__(
        self, kind: str, directories: dict[CreationScope, Path], console: Console
    ):
        self.kind = kind
        self.directories = directories
        self.console = console

    async def run(self, state: dict) -> bool:
        """Execute step. Return True on success, False to abort."""
        raise NotImplementedError


class ChooseScopeStep(BaseStep):
    """Pick the tier the new file is written to."""

    async def run(self, state: dict) -> bool:
        scope = await questionary.select(
            f"Where should the {self.kind} be saved?",
            choices=[
                questionary.Choice(
                    f"Project ({self.directories['project']})", value="project"
                ),
                questionary.Choice(
                    f"Global ({self.directories['global']})", value="global"
                ),
            ],
        ).ask_async()
        if scope is None:
            return False

        state["scope"] = scope
        return True


class ChooseMethodStep(BaseStep):
    """Manual template or assistant-generated content."""

    async def run(self, state: dict) -> bool:
        method = await questionary.select(
            "How would you like to create it?",
            choices=[
                questionary.Choice("Generate with assistant", value="generate"),
                questionary.Choice("Manual configuration", value="manual"),
            ],
        ).ask_async()
        if method is None:
            return False

        state["method"] = method
        return True


class DescribeStep(BaseStep):
    """Ask what the definition should do. Only used for generation."""

    async def run(self, state: dict) -> bool:
        if state.get("method") != "generate":
            return True

        description = await questionary.text(
            f"Describe what this {self.kind} should do:"
        ).ask_async()
        if description is None:
            return False

        state["description"] = description.strip() or None
        return True


class ChooseNameStep(BaseStep):
    """Ask for a name unless one was given on the command line."""

    async def run(self, state: dict) -> bool:
        if state.get("name"):
            return True

        directory = self.directories[state["scope"]]

        def validate(value: str) -> bool | str:
            if not value:
                return "Name cannot be empty."
            if not is_valid_name(value):
                return "Name can only contain letters, numbers, underscores, and hyphens."
            if (directory / f"{value}.md").exists():
                return f'{self.kind.capitalize()} "{value}" already exists.'
            return True

        name = await questionary.text(
            f"Name for the new {self.kind}:", validate=validate
        ).ask_async()
        if name is None:
            return False

        state["name"] = name
        return True


class CreationWorkflow:
    """Runs the creation steps in order and assembles the answers."""

    STEPS: list[type[BaseStep]] = [
        ChooseScopeStep,
        ChooseMethodStep,
        DescribeStep,
        ChooseNameStep,
    ]

    def __init__(
        self,
        kind: str,
        directories: dict[CreationScope, Path],
        console: Console | None = None,
    ):
        self.kind = kind
        self.directories = directories
        self.console = console or Console()

    async def run(self, initial_name: str | None = None) -> CreationResult | None:
        """Run all steps. Returns None if the user backs out."""
        state: dict = {"name": initial_name}

        for step_cls in self.STEPS:
            step = step_cls(self.kind, self.directories, self.console)
            if not await step.run(state):
                return None

        return CreationResult(
            name=state["name"],
            scope=state["scope"],
            method=state["method"],
            directory=self.directories[state["scope"]],
            description=state.get("description"),
        )
