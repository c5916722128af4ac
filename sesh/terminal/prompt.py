"""Line-mode prompts used outside the picker."""

import click

from ..models.exceptions import UserAbort


class Prompter:
    """Asks the user for values with a default shown in brackets."""

    def ask(self, label: str, default: str) -> str:
        """Prompt for a value. Empty input returns the default."""
        try:
            value = click.prompt(label, default=default, show_default=True)
        except click.Abort:
            raise UserAbort("Cancelled.")
        return value.strip() or default

    def confirm(self, question: str) -> bool:
        try:
            return click.confirm(question, default=False)
        except click.Abort:
            raise UserAbort("Aborted.")
