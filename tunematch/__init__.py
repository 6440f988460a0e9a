"""TuneMatch -- music-taste compatibility scoring and match coordination."""

__version__ = "0.1.0"
