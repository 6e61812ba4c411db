"""
Field (tag) listing and field-based topic filtering.
"""
