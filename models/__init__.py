"""
Models package for the Resource Manager Simulator.
Activities, tasks, workloads and the state owned by a resource manager run.
"""
