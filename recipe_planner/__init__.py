"""
Recipe planner: genetic search for daily meal plans.
"""
__version__ = "0.1.0"
