"""
Portfolio projects and skills.
"""
