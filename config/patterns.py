"""Shared URL path patterns."""

# Canonical 8-4-4-4-12 hex UUID, as Django's ``<uuid:...>`` converter accepts
UUID_PATTERN = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
