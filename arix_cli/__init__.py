"""arix command line interface."""
