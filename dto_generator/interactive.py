"""
Interactive prompts for generation settings.

Asks for the class suffix and then the naming style, in that order. A
dismissed prompt (Ctrl-C / EOF) aborts the whole operation.
"""

from typing import Optional, Union

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table
from rich import box

from .codegen.core.config import DEFAULT_SUFFIX
from .codegen.core.generator import UserAbort
from .codegen.core.naming import NamingStyle, convert_case, list_naming_styles
from .logging_config import get_logger

logger = get_logger(__name__)

NO_SUFFIX = "-"
SAMPLE_FIELD = "userName"


class GenerationPrompter:
    """Collects the suffix and naming style from the user."""

    def __init__(self, console: Console = None):
        """
        Initialize the prompter.

        Args:
            console: Rich console instance (creates new if None)
        """
        self.console = console or Console()

    def collect(
        self,
        suffix: Optional[str] = None,
        naming_style: Optional[Union[str, NamingStyle]] = None,
    ) -> tuple[str, NamingStyle]:
        """
        Prompt for whichever settings were not supplied.

        Raises:
            UserAbort: If a prompt is dismissed
        """
        if suffix is None:
            suffix = self.ask_suffix()
        if naming_style is None:
            naming_style = self.ask_naming_style()
        return suffix, NamingStyle.from_value(naming_style)

    def ask_suffix(self, default: str = DEFAULT_SUFFIX) -> str:
        """Ask for the class suffix; ``-`` means no suffix."""
        answer = self._ask(
            f"Enter class suffix (e.g. 'DTO', '{NO_SUFFIX}' for none)",
            default=default,
        )
        suffix = "" if answer.strip() == NO_SUFFIX else answer.strip()
        logger.debug("Suffix selected: %r", suffix)
        return suffix

    def ask_naming_style(self) -> NamingStyle:
        """Ask for the field naming style."""
        self._show_styles()
        answer = self._ask(
            "Select the field naming style", choices=list_naming_styles()
        )
        logger.debug("Naming style selected: %s", answer)
        return NamingStyle.from_value(answer)

    def _show_styles(self) -> None:
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan")
        table.add_column("Style", style="bold green")
        table.add_column("Example", style="dim")

        for style in NamingStyle:
            table.add_row(style.value, convert_case(SAMPLE_FIELD, style))

        self.console.print(table)

    def _ask(self, prompt: str, **kwargs) -> str:
        try:
            return Prompt.ask(prompt, console=self.console, **kwargs)
        except (KeyboardInterrupt, EOFError) as e:
            self.console.print("\n[yellow]Generation cancelled[/yellow]")
            raise UserAbort(f"Prompt dismissed: {prompt}") from e
