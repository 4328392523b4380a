"""
Core models, schemas and configuration for capture reports.
"""
