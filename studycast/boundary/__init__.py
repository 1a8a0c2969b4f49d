"""
Boundary layer for external system integrations.

Handles all interactions with external systems (content store, language
model, speech synthesis, text extraction). Provides adapters and clients
for infrastructure dependencies.
"""
