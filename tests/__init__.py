"""
Test Suite for the Psychrometric Converter

This module contains tests for:
- Psychrometric calculations (test_psychrometrics.py)
- Validation logic (test_validators.py)
- API endpoints (test_api.py)

Run tests with:
    pytest tests/ -v
    pytest tests/ --cov=core --cov=api
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
