"""
Test suite for Quotebox
"""
