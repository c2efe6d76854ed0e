"""
Auth subsystem.

Components:
- models.py: User (immutable value object) + record (de)serialization
- credentials.py: how passwords are stored and checked
- manager.py: AuthManager (registered users + current session)
"""
