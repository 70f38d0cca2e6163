"""
Connectors that drive a Scheduler from the outside world (console REPL).
"""
