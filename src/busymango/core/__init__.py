"""Core busymango logic, independent of any interface."""
