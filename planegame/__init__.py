"""A small arcade plane shooter built on a scene stack, entity-component systems and pygame."""

__version__ = "0.0.1"