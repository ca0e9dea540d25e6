"""UniFi controller data model and its reporting to Datadog."""

__version__ = "0.1.0"