"""Interaction webhook: Ed25519 verification, command dispatch, HTTP routes.

Receives interactions from Discord on a single POST endpoint.
Each request is signature-verified before its body is parsed.
"""
