"""
Infrastructure adapters for the portfolio engine.
"""
