from .display import DEFAULT_COLOR, Color, Display, TextDisplay

__all__ = ["Color", "DEFAULT_COLOR", "Display", "TextDisplay"]
