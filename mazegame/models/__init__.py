# Model package init
from .models import BestTime  # noqa: F401 re-export

__all__ = ["BestTime"]
