from typing import Protocol


class Port(Protocol):
    """Marker base for the interfaces a domain expects infrastructure to provide."""
