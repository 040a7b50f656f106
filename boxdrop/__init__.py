"""A falling-block puzzle game: piece logic, the playing field and a Tk window."""

__version__ = "0.1.0"
__all__ = ["pieces", "game", "app"]