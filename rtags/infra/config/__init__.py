from rtags.infra.config.groups import IndexConfig, StoreConfig
from rtags.infra.config.settings import Settings, settings

__all__ = [
    # Settings
    "Settings",
    "settings",
    # Config Groups
    "IndexConfig",
    "StoreConfig",
]
