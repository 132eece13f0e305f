"""Presentation layer - HTTP endpoints other than the gateway webhooks."""
