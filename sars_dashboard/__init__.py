"""SARS 2003 outbreak dashboard."""
