"""
API Module - FastAPI Backend

This module provides the REST API for the Psychrometric Converter.
It handles input validation and humidity conversion.

Key Components:
- main.py: FastAPI application and root endpoints
- models.py: Pydantic schemas for request/response validation
- routes/: API endpoint implementations

Endpoints:
- POST /api/v1/convert: Convert one humidity measurement into all three
- POST /api/v1/convert/validate: Validate conversion input only
- GET /api/v1/convert/saturation: Saturation values at a temperature
"""

__version__ = "0.1.0"
