"""taprun - task runner with tap-linked plugin tasks."""

__version__ = "0.3.0"
