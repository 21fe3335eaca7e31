"""
jobscope - live monitoring and control surface for scheduled jobs.
"""

__version__ = "0.3.0"
