"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class MarketStatus(str, Enum):
    ACTIVE = "Active"
    CLOSED = "Closed"
    SETTLED = "Settled"


class Outcome(str, Enum):
    A = "A"
    B = "B"
