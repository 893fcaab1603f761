"""Core discovery and sub-agent orchestration."""
