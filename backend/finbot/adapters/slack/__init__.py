"""Slack slash-command gateway."""
