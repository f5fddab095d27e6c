from .parts_repo import PartsRepo
from .sets_repo import SetsRepo

__all__ = ["PartsRepo", "SetsRepo"]
