"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, Session) and id ordering
- session_store.py: in-memory session store + task id issuance
- task_api.py: task operations on one session (add/list/update/upsert/next)
"""
