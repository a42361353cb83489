"""Terminal browser for one team's recent and upcoming fixtures."""

__version__ = "0.1.0"
