"""
Core building blocks shared by the auth and task subsystems.

Components:
- ports.py: Protocols the managers depend on (storage, credentials, bootstrap source)
- errors.py: exception hierarchy
- clock.py: UTC timestamps + ISO-8601 helpers
- ids.py: entity identifier generation
- state.py: AppState (the wired application)
"""
