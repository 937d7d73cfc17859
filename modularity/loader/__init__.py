"""Loader — trait file location, load-once execution, directive application."""
