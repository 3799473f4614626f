"""exclusive-drop - limited-inventory waitlist service."""

__version__ = "0.1.0"
