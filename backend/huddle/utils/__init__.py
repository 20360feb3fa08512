from .id_generator import generate_id, generate_join_code
from .logging import get_logger, setup_logging
from .time_utils import get_timestamp_ms, next_sequence

__all__ = [
    "generate_id",
    "generate_join_code",
    "get_logger",
    "setup_logging",
    "get_timestamp_ms",
    "next_sequence",
]
