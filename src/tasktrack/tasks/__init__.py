"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskUpdate, TaskStatistics, StatusFilter)
- task_manager.py: TaskManager (collection + filtering/statistics + persistence)
- bootstrap_source.py: demo data source used to seed an empty collection
"""
