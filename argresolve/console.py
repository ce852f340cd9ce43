# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances used when argresolve prints help or errors."""
from rich.console import Console

console = Console()
error_console = Console(stderr=True)
