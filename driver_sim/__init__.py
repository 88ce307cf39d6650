from .config import GameConfig
from .env import DriverEnv
from .gym_env import DriverGymEnv

__all__ = ["DriverEnv", "DriverGymEnv", "GameConfig"]
