"""agentdeck: discover and delegate to markdown-defined sub-agents."""

__version__ = "0.1.0"
