"""
Engine core.

Components:
- task.py: Task and its target variants (DirectRef, NamedLookup)
- scheduler.py: the queue, run loop, defer/once semantics, kill/clear/value
- ports.py: owner name-resolution base (Scope) and the error hook Protocol
- errors.py: exception types
- state.py: AppState used by the console
"""
