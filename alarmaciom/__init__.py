"""Desktop alarm clock: alarm records and storage, scheduling rules and a Tk window."""

__version__ = "1.0.0"