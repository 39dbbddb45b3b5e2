from .snapshot import StateMachineSnapshot
from .setting import Settings, get_settings, reload_settings, strict_decode_enabled

__all__ = [
    # Snapshot
    "StateMachineSnapshot",
    # Settings
    "Settings", "get_settings", "reload_settings", "strict_decode_enabled",
]
