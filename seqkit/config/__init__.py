from .loader import load_document, load_run_config
from .types import ConfigError, RunConfig, UnsupportedConfigFormatError

__all__ = [
    "load_document",
    "load_run_config",
    "RunConfig",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
