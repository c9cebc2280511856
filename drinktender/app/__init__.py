from .tender import DrinkTender

__all__ = ["DrinkTender"]
