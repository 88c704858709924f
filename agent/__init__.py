from .strategy_engine import MoveStrategy, RandomStrategy, FixedStrategy, CoinFlipStrategy
from .opponent_model import OpponentModel, OpponentProfile
from .bankroll import BankrollPolicy, BankrollManager
from .rating import RatingSystem, RatingUpdate
from .config import Config
