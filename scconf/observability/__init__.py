"""Observability: structured logging with secret redaction."""
