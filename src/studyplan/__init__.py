"""Study time scheduler: availability, allocation and slot packing."""

__version__ = "0.1.0"
