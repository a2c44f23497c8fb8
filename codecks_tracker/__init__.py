"""Codecks issue tracker extension for version-control clients."""

from codecks_tracker.card_label import CardLabelCodec, decode_label, encode_label
from codecks_tracker.factory import create_extension, get_configuration
from codecks_tracker.models import ExtensionConfig, Task

__version__ = "0.1.0"
__all__ = [
    "CardLabelCodec",
    "ExtensionConfig",
    "Task",
    "create_extension",
    "decode_label",
    "encode_label",
    "get_configuration",
]
