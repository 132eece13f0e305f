"""
DOMAIN LAYER - Service ports and business errors

Contains:
- ports/services: abstract finance services the bot's commands address
- exceptions: errors raised by startup and routing code
"""
