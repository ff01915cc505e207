"""Domain-specific configuration accessors."""
from .context import ContextConfig
from .engine import EngineConfig
from .logging import LoggingConfig

__all__ = ["ContextConfig", "EngineConfig", "LoggingConfig"]
