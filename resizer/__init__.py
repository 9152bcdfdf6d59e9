"""On-demand image resizing in front of an S3 bucket."""

__version__ = "1.0.0"
