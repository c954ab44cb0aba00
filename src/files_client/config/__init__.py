"""
Configuration management for the Files request builders.

Contains the Pydantic settings that select the API version, the services root
and the default Connect headers.
"""
