"""
Algorithms package for the Resource Manager Simulator.
Contains deadlock avoidance (Banker's), detection, and recovery implementations.
"""
