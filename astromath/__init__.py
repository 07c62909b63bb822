"""AstroMath: arithmetic practice as a falling-block shooter."""
from .models import GameState, OperationCategory
from .session import GameSession

__all__ = ['GameSession', 'GameState', 'OperationCategory']
__version__ = '0.1.0'
