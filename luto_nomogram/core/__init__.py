"""
Core Package - Scoring
"""
