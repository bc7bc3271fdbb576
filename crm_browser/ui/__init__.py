"""
Dash UI layer: layout builders and callback registration.
"""
