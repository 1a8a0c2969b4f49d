"""
Application layer: services that orchestrate the boundary adapters for the API.
"""
