"""Latest article card - renders the newest blog post as a PNG card."""

__version__ = "0.1.0"
