"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make SnapshotModel easier to read
PieceData = dict[str, str]  # {"type": "rook", "color": "black"}
BoardGrid = list[list[Optional[PieceData]]]


@dataclass
class SnapshotModel:
    """Transport-safe representation of a board snapshot used between API, Service, DB, and Game layers."""

    session_id: str
    board: BoardGrid
    timestamp: str  # ISO-8601
    player_id: str
