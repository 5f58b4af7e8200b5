"""
Corona Stats Slack Bot

Polls VG's Norwegian corona statistics and keeps a Slack channel
updated with the latest infection and death counts.
"""

__version__ = "1.0.0"
