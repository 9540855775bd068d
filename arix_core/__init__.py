"""Core library for the arix toolbox."""
