"""buildcat: server artifact catalog builder and support-status resolver."""

__version__ = "0.1.0"
