"""
Command-line entry points.

Components:
- bootstrap.py: composition root (settings -> storage -> managers -> AppState)
- commands.py: slash-command registry and handlers
- main.py: `tasktrack` console script
"""
