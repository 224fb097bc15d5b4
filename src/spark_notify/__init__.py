"""Post build notifications to Webex (Spark) spaces."""

__version__ = "1.0.0"
