"""
PrepFeed: personalised current affairs recommendations and interaction tracking
"""

# App version
__version__ = "1.0.0"
