"""Input-layer public API for key decoding and side-command dispatch.

Exports are split between low-level terminal decoding (`read_key`) and the
key table the controller hands to renderers.
"""

from .key_registry import SIDE_COMMAND_KEYS, KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, decode_control_byte, read_key

__all__ = [
    "read_key",
    "decode_control_byte",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "SIDE_COMMAND_KEYS",
    "KeyComboBinding",
    "KeyComboRegistry",
]
