"""
Services for assembling, summarizing and rendering capture reports.
"""
