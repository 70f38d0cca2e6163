"""
Console application: bootstrap (composition root), slash commands, demo actions, entrypoint.
"""
