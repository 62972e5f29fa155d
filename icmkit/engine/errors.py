from __future__ import annotations


class ICMError(ValueError):
    """Base class for engine input errors. Deterministic: never worth retrying."""


class InvalidInputError(ICMError):
    pass


class IndexOutOfRangeError(ICMError, IndexError):
    def __init__(self, player_index: int, n_players: int):
        super().__init__(f"player_index {player_index} out of range for {n_players} stacks")
        self.player_index = player_index
        self.n_players = n_players


class DegenerateStackError(ICMError):
    pass
