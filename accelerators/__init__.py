"""
Acceleration structures
"""
