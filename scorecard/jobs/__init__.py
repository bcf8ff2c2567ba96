"""Batch maintenance jobs, runnable as `python -m scorecard.jobs.<name>`."""
