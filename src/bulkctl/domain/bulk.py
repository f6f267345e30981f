"""The bulk value handed to sinks once a boundary closes it."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Bulk:
    """An ordered, closed batch of commands.

    Attributes:
        started_at: Clock reading taken when the first command was buffered.
        commands: Commands in arrival order.  Never empty.
    """

    started_at: int
    commands: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.commands:
            msg = "A bulk must contain at least one command"
            raise ValueError(msg)

    def __len__(self) -> int:
        return len(self.commands)
