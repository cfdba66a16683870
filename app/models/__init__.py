from .task import Task, new_task

# Public model API
__all__ = ["Task", "new_task"]
