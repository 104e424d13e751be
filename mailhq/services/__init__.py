"""
Domain services: campaign lifecycle, dashboard aggregation and settings.
"""
