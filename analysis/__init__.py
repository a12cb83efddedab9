"""
Analysis package for the Resource Manager Simulator.
Event log, run metrics and report formatting.
"""
