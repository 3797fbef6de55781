"""Constants, configuration and small parsing helpers."""
