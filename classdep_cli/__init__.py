"""classdep: scoped PlantUML class diagrams from analyzed dependency graphs."""

__version__ = "0.3.0"
