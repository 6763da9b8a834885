"""
UI services for the checklist app.
"""
