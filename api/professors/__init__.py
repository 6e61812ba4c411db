"""
Professor (supervisor) listing.
"""
