# src/domain/reel/entities/reel.py
from typing import List, Sequence, Tuple, Union


class Reel:
    """
    Represents the reelset of a single reel: the ordered, circular
    sequence of symbol characters painted on the strip.
    """
    def __init__(self, symbols: Union[str, Sequence[str]], reel_id: str = ""):
        """
        Initialize a reel with symbols.

        Args:
            symbols: Symbol characters in order, as a string ("AGHHBX") or a sequence
            reel_id: Optional identifier for the reel
        """
        self.id = reel_id
        self.symbols: Tuple[str, ...] = tuple(symbols)
        self.length = len(self.symbols)

    def symbol_at(self, position: int) -> str:
        """
        Get the symbol at a position, wrapping around the reel.

        Args:
            position: Position on the reel, may exceed the reel length

        Returns:
            Symbol character at that position

        Raises:
            IndexError: If the reel is empty
        """
        if self.length == 0:
            raise IndexError("Cannot look up a symbol on an empty reel")
        return self.symbols[position % self.length]

    def has_single_character_symbols(self) -> bool:
        """True when every entry is a one-character string."""
        return all(isinstance(symbol, str) and len(symbol) == 1 for symbol in self.symbols)

    def get_symbols_at_position(self, position: int, window_size: int = 4) -> List[str]:
        """
        Get the symbols visible in the window at the given position.
        Handles wrapping around the reel.

        Args:
            position: Starting position on the reel
            window_size: Number of symbols to return (default: 4)

        Returns:
            List of visible symbols
        """
        result = []
        if self.length == 0:
            return result

        for i in range(window_size):
            result.append(self.symbols[(position + i) % self.length])
        return result

    def __len__(self) -> int:
        """Return the length of the reel."""
        return self.length

    def __eq__(self, other) -> bool:
        if not isinstance(other, Reel):
            return NotImplemented
        return self.symbols == other.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"Reel(id={self.id}, symbols={''.join(self.symbols)})"
