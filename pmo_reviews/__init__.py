"""
PMO review tracker: site-visit reviews and AI-generated summary reports.
"""

__version__ = "1.0.0"
