"""Generate CHANGES.md entries from the git log."""
