"""User-facing front ends: curses terminal and REST API."""
