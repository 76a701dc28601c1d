"""
Core domain layer: record tables, the selection coordinator and the view contract.
"""
