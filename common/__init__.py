"""Shared building blocks for rename_tool: logging, filesystem, config."""
