"""
Utilities package for the Resource Manager Simulator.
"""
