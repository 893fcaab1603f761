"""Command-line interface for agentdeck."""
