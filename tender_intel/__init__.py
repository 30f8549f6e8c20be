"""UK electricity-supply tender intelligence pipeline."""

__version__ = "0.1.0"
