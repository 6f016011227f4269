from hostmend.runner import Orchestrator, Task, TaskCategory, TaskResult, TaskStatus

__all__ = ["Orchestrator", "Task", "TaskCategory", "TaskResult", "TaskStatus"]
