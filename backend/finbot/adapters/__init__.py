"""Gateway adapters - connect chat platforms to the command dispatcher."""
