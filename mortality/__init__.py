"""Leading causes of death in the United States — load, normalize, aggregate."""
__version__ = "1.0.0"
