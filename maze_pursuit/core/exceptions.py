class InvalidMoveError(ValueError):
    """Raised when a turn is illegal or requested after the game has ended"""
    pass


class MalformedLevelError(ValueError):
    """Raised when a level description cannot be turned into a board"""
    pass
