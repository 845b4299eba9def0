"""
Number formatting for displaying vectors and matrices.

Display only: nothing here feeds back into a computation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class NumberFormatter:
    """
    Formats a float with a format spec, right-aligned to a minimum width.

    Attributes:
        spec: Format specification passed to format(), e.g. ',.1f'
        width: Minimum field width
    """
    spec: str
    width: int = 1

    @classmethod
    def pretty(cls) -> 'NumberFormatter':
        """One decimal, thousands grouping, aligned in 9-character columns."""
        return cls(',.1f', 9)

    @classmethod
    def compact(cls) -> 'NumberFormatter':
        return cls(',.1f', 1)

    @classmethod
    def compact_no_decimals(cls) -> 'NumberFormatter':
        return cls('.0f', 1)

    @classmethod
    def of(cls, spec: str, width: int = 1) -> 'NumberFormatter':
        return cls(spec, width)

    def __call__(self, value: float) -> str:
        return format(format(value, self.spec), f'>{self.width}')
