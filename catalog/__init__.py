"""
Catalog app: product querying, analytics and change notifications.
"""
