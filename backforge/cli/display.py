"""
Display utilities for the BackForge CLI.

Provides colored output and formatting functions.
"""

import sys
from typing import Optional


# ANSI color codes
class Colors:
    """ANSI color code constants."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'

    @staticmethod
    def is_supported() -> bool:
        """Check if terminal supports colors."""
        return hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()


def colorize(text: str, color: str) -> str:
    """
    Colorize text if terminal supports it.

    Args:
        text: Text to colorize
        color: Color code from Colors class

    Returns:
        Colorized text if supported, plain text otherwise
    """
    if Colors.is_supported():
        return f"{color}{text}{Colors.RESET}"
    return text


def print_banner():
    """Print BackForge banner."""
    print(colorize("BackForge - pluggable backend registry", Colors.CYAN))


def print_success(message: str):
    """Print success message in green with checkmark."""
    print(f"{colorize('✓', Colors.GREEN)} {message}")


def print_error(message: str):
    """Print error message in red with X."""
    print(f"{colorize('✗', Colors.RED)} {message}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message in yellow with warning symbol."""
    print(f"{colorize('⚠', Colors.YELLOW)} {message}")


def print_info(message: str):
    """Print info message in blue."""
    print(f"{colorize('ℹ', Colors.BLUE)} {message}")


def print_section(title: str):
    """Print section header."""
    print(f"\n{colorize(title, Colors.BOLD)}")
    print("─" * len(title))


def print_table_row(col1: str, col2: str, width1: int = 20):
    """Print a simple two-column table row."""
    print(f"  {col1:<{width1}} {col2}")


def format_node(name: str, is_dir: bool, enabled: bool = True, aliases: Optional[tuple] = None) -> str:
    """
    Format a registry entry for tree output.

    Directories get a trailing '/', aliases are listed in brackets and
    disabled entries are dimmed and marked.
    """
    label = f"{name}/" if is_dir else name
    if aliases:
        label += f" [{', '.join(aliases)}]"
    if not enabled:
        label = colorize(f"{label} (disabled)", Colors.DIM)
    return label
