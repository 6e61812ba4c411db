"""
Thesis proposal (topic) listing: store, page assembly, routes.
"""
