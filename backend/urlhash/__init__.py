from .codec import (
    HashComponents,
    InvalidHashError,
    decode_hash,
    encode_hash,
    round_components,
)
from .sync import SurfaceNotAttachedError, URLHash

__all__ = [
    "HashComponents",
    "InvalidHashError",
    "SurfaceNotAttachedError",
    "URLHash",
    "decode_hash",
    "encode_hash",
    "round_components",
]
