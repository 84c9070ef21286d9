"""
Core Package

Contains the exchange-agnostic building blocks of the client:
- config: Settings loaded from environment variables / .env
- logging: Logger setup and API logging helpers
- exceptions: ValidationError, ApiError and TransportError
- schemas: Pydantic models for the response envelope and request parameters
"""
