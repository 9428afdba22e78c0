"""Discord interactions webhook that exports message reactions as CSV."""
