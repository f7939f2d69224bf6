"""Command-line applications for rename_tool."""
