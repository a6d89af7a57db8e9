"""
Catalog Engine Django project.
"""
