from .errors import ArgumentError
from .executor import TaskCallbackError, TaskError, array_executor, run_array, run_sequence
from .util import concatenate, get_path_value, object_copy

__all__ = [
    "concatenate",
    "object_copy",
    "array_executor",
    "run_array",
    "run_sequence",
    "get_path_value",
    "TaskError",
    "TaskCallbackError",
    "ArgumentError",
]
