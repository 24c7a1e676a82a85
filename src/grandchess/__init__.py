"""GrandChess — chess rules and an alpha-beta opponent for boards up to 99x99."""

__version__ = "0.1.0"
