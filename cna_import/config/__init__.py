from .loader import ConfigError, default_header_mappings, load_config, load_header_mappings

__all__ = [
    "ConfigError",
    "default_header_mappings",
    "load_config",
    "load_header_mappings",
]
