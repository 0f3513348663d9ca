from .loader import (
    MonosplitConfig,
    ConfigError,
    load_config_from_path,
    CONFIG_FILENAME,
)

__all__ = ["MonosplitConfig", "ConfigError", "load_config_from_path", "CONFIG_FILENAME"]
