"""
Toronto LUTO Nomogram
"""
__version__ = "1.0.0"
