"""
Core domain logic: models, classification rules, field extraction and record building.
"""
