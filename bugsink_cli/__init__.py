"""BugSink CLI - command-line client for the BugSink error tracking API."""

__version__ = "0.1.0"
