"""Outbound Discord REST API access."""
