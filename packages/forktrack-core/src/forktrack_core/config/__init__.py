from .loader import DEFAULT_CONFIG_TEMPLATE, load_config
from .models import (
    ForktrackConfig,
    GitSettings,
    SetupConfig,
    StatusConfig,
)

__all__ = [
    "DEFAULT_CONFIG_TEMPLATE",
    "ForktrackConfig",
    "GitSettings",
    "SetupConfig",
    "StatusConfig",
    "load_config",
]
