"""
Owner-scoped resource services. Each function takes the session and the
authenticated caller's id explicitly.
"""
