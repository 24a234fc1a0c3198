"""claudist - filtered access to Claude Code conversation transcripts.

Reads the JSONL session logs Claude Code writes under ``~/.claude/projects``,
strips reasoning blocks, sub-agent traffic and noisy tool output according to
a composable filter configuration, and renders the result as XML.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
