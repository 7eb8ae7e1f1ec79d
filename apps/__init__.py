"""Reporting applications: habits and tasks pipelines and the snapshot scheduler."""
