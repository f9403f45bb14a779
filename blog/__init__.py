"""
Blog posts and likes.
"""
