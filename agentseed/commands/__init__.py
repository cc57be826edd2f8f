"""CLI command implementations."""

from agentseed.commands._common import CommandOptions
from agentseed.commands.init import run_init
from agentseed.commands.scan import run_scan

__all__ = ["CommandOptions", "run_init", "run_scan"]
