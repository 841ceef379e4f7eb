"""Terminal input collaborator built on rich prompts.

Renders a PromptDescriptor as an interactive question and returns the raw
value; normalisation and checks happen in the engine. Multi-choice lists are
shown numbered and accept numbers or option names separated by commas.
"""

from __future__ import annotations

from typing import Any, List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from prompt_factory.models.question import DescriptorKind, PromptDescriptor


class TerminalCollaborator:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _label(self, descriptor: PromptDescriptor) -> str:
        marker = " [red]*[/red]" if descriptor.required else ""
        return f"[bold]{escape(descriptor.label)}[/bold]{marker}{escape(descriptor.suffix or '')}"

    def _show_options(self, descriptor: PromptDescriptor) -> None:
        for index, option in enumerate(descriptor.options or [], start=1):
            self.console.print(f"  [cyan]{index}[/cyan]. {escape(option)}")

    def _resolve_option(self, token: str, options: List[str]) -> str:
        token = token.strip()
        if token.isdigit() and 1 <= int(token) <= len(options):
            return options[int(token) - 1]
        return token

    def ask(self, descriptor: PromptDescriptor) -> Any:
        label = self._label(descriptor)
        if descriptor.kind == DescriptorKind.CONFIRM:
            return Confirm.ask(label, default=bool(descriptor.default), console=self.console)

        if descriptor.kind == DescriptorKind.SELECT:
            options = descriptor.options or []
            self.console.print(label)
            self._show_options(descriptor)
            default = descriptor.default if descriptor.default in options else None
            answer = Prompt.ask("Choice", default=default, console=self.console)
            return self._resolve_option(answer or "", options)

        if descriptor.kind == DescriptorKind.CHECKBOX:
            options = descriptor.options or []
            self.console.print(label)
            self._show_options(descriptor)
            default = ", ".join(descriptor.default or []) or None
            answer = Prompt.ask("Choices (comma-separated)", default=default, console=self.console) or ""
            return [self._resolve_option(tok, options) for tok in answer.split(",") if tok.strip()]

        if descriptor.kind == DescriptorKind.EDITOR:
            self.console.print(label)
            if descriptor.columns:
                self.console.print(f"[dim]Rows need keys: {escape(', '.join(descriptor.columns))}[/dim]")
            edited = click.edit(text=descriptor.default, extension=".json")
            # click.edit returns None when the editor closes without saving
            return descriptor.default if edited is None else edited

        default = descriptor.default if isinstance(descriptor.default, str) else None
        return Prompt.ask(label, default=default, console=self.console) or ""

    def reject(self, descriptor: PromptDescriptor, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red] Let's try again.\n")


__all__ = ["TerminalCollaborator"]
