"""Configuration helpers shared by rename_tool commands."""
