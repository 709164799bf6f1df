"""
Simple Budget API: users, categories and transactions behind Basic auth.
"""
