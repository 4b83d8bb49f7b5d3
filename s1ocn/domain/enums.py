"""Domain enums for catalogue queries and search outcomes."""

from enum import Enum


class ValueOperator(str, Enum):
    """Comparison operator enum."""

    EQ = "eq"
    LE = "le"
    GE = "ge"
    LT = "lt"
    GT = "gt"


class NoData(Enum):
    """Search outcome when nothing matched."""

    NO_DATA = "no_data"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_DATA"


NO_DATA = NoData.NO_DATA
