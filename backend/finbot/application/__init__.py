"""
APPLICATION LAYER - Command routing

Routes slash commands to finance service operations:
registry -> resolver -> invoker, driven by the dispatcher.
"""
