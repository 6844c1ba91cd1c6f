"""Location-based weather viewer shell: state orchestration for map, layers and screen modes."""

__version__ = "0.1.0"
