from .objects import get_path_value, object_copy
from .strings import concatenate

__all__ = ["concatenate", "object_copy", "get_path_value"]
