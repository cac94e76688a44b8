"""Serialization and the catalog/programs API client."""
