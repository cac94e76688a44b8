"""Core editing model: entries, list store, catalog adapter, assembler."""
