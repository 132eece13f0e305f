"""
PORTS - Interfaces the bot's commands depend on

Infrastructure layer provides implementations.
"""
