# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance used to print generated help."""
from rich.console import Console

console = Console(soft_wrap=True, highlight=False)
