"""testdeck - bulk spreadsheet import pipeline for the test-management console."""

__version__ = "0.4.0"
