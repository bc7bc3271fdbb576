"""
Service layer: record providers, the JSON record store, dashboard summaries.
"""
