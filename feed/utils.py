"""
Utility functions for the arrival feed:
    - lane id codec (ASCII decimal, one id per stream read)
    - random source lane selection for producers
"""

import logging
import random
from typing import Optional, Sequence

log = logging.getLogger("feed")


# ---------- Codec ----------
def decode_lane(data: bytes) -> Optional[int]:
    """
    Decode one stream read into a lane id.

    The wire carries a bare ASCII decimal integer per read, with no
    delimiter. Surrounding whitespace is ignored.

    Args:
        data (bytes): Raw bytes of one ``recv`` call.

    Returns:
        Optional[int]: The decoded integer, or None if the read is not a
        decimal integer. Range checking is left to the simulation.
    """
    try:
        text = data.decode("ascii").strip()
    except UnicodeDecodeError:
        log.debug("decode_failed non-ascii payload=%r", data[:32])
        return None
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        log.debug("decode_failed payload=%r", text[:32])
        return None


def encode_lane(lane_id: int) -> bytes:
    """
    Encode a lane id the way the listener expects it.

    Args:
        lane_id (int): Lane identifier.

    Returns:
        bytes: ASCII decimal representation, no terminator.
    """
    return str(int(lane_id)).encode("ascii")


# ---------- Producers ----------
def random_lane(lanes: Sequence[int], rng: Optional[random.Random] = None) -> int:
    """
    Pick one lane id uniformly.

    Args:
        lanes (Sequence[int]): Candidate lane ids (usually the source lanes).
        rng (random.Random, optional): Random source; module RNG if omitted.

    Returns:
        int: The chosen lane id.
    """
    return (rng or random).choice(list(lanes))
