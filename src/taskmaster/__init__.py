"""
TaskMaster backend package.

An in-memory task list (``manager.TaskManager``) with filtering, sorting,
statistics and JSON/CSV export, served over a FastAPI REST API
(``main.create_app``).
"""
