"""Economic indicator gauges: period aggregates, axis scales, bands and threshold alerts."""

__version__ = "0.1.0"
