"""Personal activity planner: stores activities and suggests what to do now."""

__version__ = "0.1.0"
