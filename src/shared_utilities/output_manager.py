"""
Output delivery utilities.

This module writes finished reports to their sinks: plain files and the
GitHub Actions step output file (``$GITHUB_OUTPUT``).
"""

import secrets
import string
from pathlib import Path

from . import get_logger

logger = get_logger(__name__)

_DELIMITER_ALPHABET = string.ascii_lowercase + string.digits


def generate_delimiter(prefix: str = "EOF_", length: int = 7) -> str:
    """Generate a random heredoc delimiter for multi-line action outputs."""
    suffix = "".join(secrets.choice(_DELIMITER_ALPHABET) for _ in range(length))
    return f"{prefix}{suffix}"


class OutputManager:
    """Writes report content to files and CI output sinks."""

    def save_output(self, content: str, output_path: str | Path) -> Path:
        """
        Save content to a file, creating parent directories as needed.

        Args:
            content: Content to save
            output_path: Destination file

        Returns:
            Path to the saved file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.info(f"Saved output to {output_path}", size=len(content))
        return output_path

    def append_github_output(
        self,
        name: str,
        value: str,
        output_file: str | Path,
        delimiter: str | None = None,
    ) -> str:
        """
        Append a multi-line value to a GitHub Actions output file.

        The value is framed as ``name<<DELIMITER`` ... ``DELIMITER`` so that it
        may span several lines.

        Args:
            name: Output name
            value: Output value
            output_file: Path from the GITHUB_OUTPUT environment variable
            delimiter: Explicit delimiter (random when omitted)

        Returns:
            The delimiter used
        """
        if delimiter is None:
            delimiter = generate_delimiter()
            while delimiter in value:
                delimiter = generate_delimiter()

        with open(output_file, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n")
            f.write(f"{value}\n")
            f.write(f"{delimiter}\n")

        logger.debug(f"Wrote action output '{name}' to {output_file}")
        return delimiter
